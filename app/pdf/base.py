from abc import ABC, abstractmethod


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Extract plain text from PDF bytes.

        Pages are joined with a newline in document order and the result is
        stripped, so identical bytes always yield identical text.

        Raises:
            PdfExtractionError: on corrupt, encrypted or unreadable documents.
        """


def join_pages(pages: list[str]) -> str:
    """Concatenate per-page text in document order."""
    return "\n".join(page.strip() for page in pages).strip()
