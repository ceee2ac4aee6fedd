import io

import pdfplumber

from app.pdf.base import BasePdfExtractor, join_pages
from app.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts resume text with pdfplumber."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise PdfExtractionError(f"Failed to extract text from PDF: {exc}") from exc
        return join_pages(pages)
