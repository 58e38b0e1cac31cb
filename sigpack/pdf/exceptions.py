class PdfError(Exception):
    """Base exception for PDF adapter failures."""


class PdfExtractionError(PdfError):
    """Raised when page count or page text cannot be read from a PDF."""


class PdfRenderError(PdfError):
    """Raised when a page cannot be rasterized to an image."""
