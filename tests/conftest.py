import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


def build_pdf(pages: list[list[str]], encrypt: str | None = None) -> bytes:
    """Render one PDF page per entry, each line drawn top to bottom."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter, encrypt=encrypt)
    for lines in pages:
        y = 720
        for line in lines:
            c.drawString(72, y, line)
            y -= 18
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """A single-page resume with known text content."""
    return build_pdf([["Jane Doe", "Senior Python Engineer"]])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    return build_pdf([["Page one content"], ["Page two content"]])


@pytest.fixture()
def ten_page_resume_pdf_bytes() -> bytes:
    """A text-only ten-page resume; page N carries 'Experience section N'."""
    return build_pdf(
        [[f"Experience section {n}", f"Built service number {n} in Python"] for n in range(1, 11)]
    )


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """A valid PDF with a blank page and no text layer."""
    return build_pdf([[]])


@pytest.fixture()
def encrypted_pdf_bytes() -> bytes:
    return build_pdf([["Top secret resume"]], encrypt="secret")
