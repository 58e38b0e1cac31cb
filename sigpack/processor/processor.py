from collections.abc import Sequence

from sigpack.config.settings import Settings
from sigpack.detection.scanner import CandidateScanner
from sigpack.extraction.factory import MetadataExtractorFactory
from sigpack.logging.logger import Log
from sigpack.pdf.factory import PdfTextExtractorFactory, create_rasterizer
from sigpack.processor.file_loader import FileLoader
from sigpack.processor.models import Document
from sigpack.processor.pipeline import DocumentContext, PipelineStep
from sigpack.processor.steps import (
    CountPagesStep,
    ExtractSignaturesStep,
    LoadDocumentStep,
    MarkCompletedStep,
    MarkFailedStep,
    MarkProcessingStep,
    ScanCandidatesStep,
)


class DocumentProcessor:
    """Runs the signature-page pipeline for one document.

    Pipeline: mark processing -> load -> count pages -> scan -> extract -> mark completed.
    Any step error marks the document as failed and is re-raised.
    """

    def __init__(self, steps: Sequence[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = list(steps)
        self._failed_step = failed_step

    async def process(self, document: Document) -> DocumentContext:
        Log.info(f"Processing document '{document.name}' ({document.id})")
        context = DocumentContext(document=document)
        try:
            for step in self._steps:
                context = await step.run(context)
        except Exception as exc:
            context.error_message = str(exc)
            await self._failed_step.run(context)
            raise
        return context


def build_processor(settings: Settings) -> DocumentProcessor:
    """Build a DocumentProcessor with all required adapters."""
    file_loader = FileLoader()
    text_extractor = PdfTextExtractorFactory.create(settings)
    scanner = CandidateScanner(text_extractor, batch_size=settings.scan_batch_size)
    extractor = MetadataExtractorFactory.create(settings)
    steps: list[PipelineStep] = [
        MarkProcessingStep(),
        LoadDocumentStep(file_loader),
        CountPagesStep(text_extractor),
        ScanCandidatesStep(scanner),
        ExtractSignaturesStep(
            rasterizer=create_rasterizer(settings),
            extractor=extractor,
            chunk_size=settings.extraction_chunk_size,
        ),
        MarkCompletedStep(),
    ]
    return DocumentProcessor(steps=steps, failed_step=MarkFailedStep())
