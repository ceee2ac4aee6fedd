import pymupdf

from app.pdf.base import BasePdfExtractor, join_pages
from app.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts resume text with PyMuPDF."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                if doc.needs_pass:
                    raise PdfExtractionError("Failed to extract text from PDF: document is encrypted")
                pages = [page.get_text() for page in doc]
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"Failed to extract text from PDF: {exc}") from exc
        return join_pages(pages)
