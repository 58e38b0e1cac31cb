from abc import ABC, abstractmethod

from sigpack.pdf.models import RenderedPage


class BasePdfTextExtractor(ABC):
    """Contract for all PDF page text extraction adapters."""

    @abstractmethod
    def count_pages(self, pdf_bytes: bytes) -> int:
        """Return the number of pages in the PDF.

        Raises:
            PdfExtractionError: if the PDF cannot be opened.
        """

    @abstractmethod
    def extract_page(self, pdf_bytes: bytes, page_number: int) -> str:
        """Extract the text of a single page.

        Args:
            pdf_bytes: Raw PDF file content.
            page_number: One-based page number.

        Returns:
            The page's text items joined by single spaces.

        Raises:
            PdfExtractionError: if extraction fails for any reason.
        """


class BasePageRasterizer(ABC):
    """Contract for adapters that render a PDF page to an image."""

    @abstractmethod
    def render(self, pdf_bytes: bytes, page_index: int) -> RenderedPage:
        """Render the zero-based page to an image.

        Raises:
            PdfRenderError: if the page cannot be rendered.
        """
