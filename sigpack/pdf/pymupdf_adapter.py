import pymupdf

from sigpack.pdf.base import BasePageRasterizer, BasePdfTextExtractor
from sigpack.pdf.exceptions import PdfExtractionError, PdfRenderError
from sigpack.pdf.models import RenderedPage


class PyMuPdfAdapter(BasePdfTextExtractor):
    """Extracts page text from PDF using PyMuPDF."""

    def count_pages(self, pdf_bytes: bytes) -> int:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return int(doc.page_count)
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf could not open document: {exc}") from exc

    def extract_page(self, pdf_bytes: bytes, page_number: int) -> str:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                page = doc.load_page(page_number - 1)
                words = [word[4] for word in page.get_text("words")]
            return " ".join(words)
        except Exception as exc:
            raise PdfExtractionError(
                f"pymupdf extraction failed on page {page_number}: {exc}"
            ) from exc


class PyMuPdfRasterizer(BasePageRasterizer):
    """Renders PDF pages to JPEG images using PyMuPDF."""

    def __init__(self, scale: float = 1.5, jpeg_quality: int = 80) -> None:
        self._scale = scale
        self._jpeg_quality = jpeg_quality

    def render(self, pdf_bytes: bytes, page_index: int) -> RenderedPage:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                page = doc.load_page(page_index)
                pixmap = page.get_pixmap(matrix=pymupdf.Matrix(self._scale, self._scale))
                image_bytes = pixmap.tobytes("jpeg", jpg_quality=self._jpeg_quality)
                return RenderedPage(
                    image_bytes=image_bytes,
                    width=pixmap.width,
                    height=pixmap.height,
                )
        except Exception as exc:
            raise PdfRenderError(f"pymupdf failed to render page {page_index}: {exc}") from exc
