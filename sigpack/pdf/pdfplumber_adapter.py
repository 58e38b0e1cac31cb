import io

import pdfplumber

from sigpack.pdf.base import BasePdfTextExtractor
from sigpack.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfTextExtractor):
    """Extracts page text from PDF using pdfplumber."""

    def count_pages(self, pdf_bytes: bytes) -> int:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return len(pdf.pages)
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber could not open document: {exc}") from exc

    def extract_page(self, pdf_bytes: bytes, page_number: int) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                words = pdf.pages[page_number - 1].extract_words()
            return " ".join(word["text"] for word in words)
        except Exception as exc:
            raise PdfExtractionError(
                f"pdfplumber extraction failed on page {page_number}: {exc}"
            ) from exc
