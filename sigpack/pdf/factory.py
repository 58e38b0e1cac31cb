from sigpack.config.settings import Settings
from sigpack.pdf.base import BasePageRasterizer, BasePdfTextExtractor
from sigpack.pdf.pdfplumber_adapter import PdfPlumberAdapter
from sigpack.pdf.pymupdf_adapter import PyMuPdfAdapter, PyMuPdfRasterizer


class PdfTextExtractorFactory:
    """Creates the correct page text extractor based on settings."""

    ADAPTERS: dict[str, type[BasePdfTextExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfTextExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()


def create_rasterizer(settings: Settings) -> BasePageRasterizer:
    return PyMuPdfRasterizer(
        scale=settings.render_scale,
        jpeg_quality=settings.render_jpeg_quality,
    )
