import asyncio

from sigpack.detection.scanner import CandidateScanner
from sigpack.extraction.base import BaseMetadataExtractor
from sigpack.extraction.models import DEFAULT_CAPACITY, UNKNOWN_PARTY, SignatureBlock
from sigpack.logging.logger import Log
from sigpack.pdf.base import BasePageRasterizer, BasePdfTextExtractor
from sigpack.processor.file_loader import FileLoader
from sigpack.processor.models import DocumentStatus, ExtractedSignaturePage, scaled_percent
from sigpack.processor.pipeline import DocumentContext, PipelineStep

SCAN_PROGRESS_SPAN = 50
EXTRACTION_PROGRESS_SPAN = 50

PLACEHOLDER_BLOCK = SignatureBlock(
    party_name=UNKNOWN_PARTY,
    signatory_name="",
    capacity=DEFAULT_CAPACITY,
)


class MarkProcessingStep(PipelineStep):
    async def run(self, context: DocumentContext) -> DocumentContext:
        context.document.status = DocumentStatus.PROCESSING
        context.document.progress = 0
        Log.info(f"Document '{context.document.name}' marked as processing")
        return context


class MarkFailedStep(PipelineStep):
    async def run(self, context: DocumentContext) -> DocumentContext:
        context.document.status = DocumentStatus.ERROR
        Log.error(
            f"Document '{context.document.name}' marked as failed: {context.error_message}"
        )
        return context


class LoadDocumentStep(PipelineStep):
    def __init__(self, file_loader: FileLoader) -> None:
        self._file_loader = file_loader

    async def run(self, context: DocumentContext) -> DocumentContext:
        context.raw_bytes = await asyncio.to_thread(self._file_loader.load, context.document)
        Log.info(f"Loaded {len(context.raw_bytes)} bytes for document '{context.document.name}'")
        return context


class CountPagesStep(PipelineStep):
    def __init__(self, text_extractor: BasePdfTextExtractor) -> None:
        self._text_extractor = text_extractor

    async def run(self, context: DocumentContext) -> DocumentContext:
        context.page_count = await asyncio.to_thread(
            self._text_extractor.count_pages, context.raw_bytes
        )
        context.document.page_count = context.page_count
        Log.info(f"Document '{context.document.name}' has {context.page_count} pages")
        return context


class ScanCandidatesStep(PipelineStep):
    def __init__(self, scanner: CandidateScanner) -> None:
        self._scanner = scanner

    async def run(self, context: DocumentContext) -> DocumentContext:
        document = context.document

        def on_progress(processed: int, total: int) -> None:
            document.advance_progress(scaled_percent(processed, total, SCAN_PROGRESS_SPAN))

        context.candidate_pages = await self._scanner.scan(
            context.raw_bytes,
            context.page_count,
            on_progress=on_progress,
            document_name=document.name,
        )
        return context


class ExtractSignaturesStep(PipelineStep):
    """Renders each candidate page and extracts its signing blocks.

    Candidates are handled in chunks; pages inside a chunk run concurrently,
    which bounds the number of in-flight oracle calls to the chunk size.
    A failing page contributes no records and does not fail the document.
    """

    DEFAULT_CHUNK_SIZE = 5

    def __init__(
        self,
        rasterizer: BasePageRasterizer,
        extractor: BaseMetadataExtractor,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")
        self._rasterizer = rasterizer
        self._extractor = extractor
        self._chunk_size = chunk_size

    async def run(self, context: DocumentContext) -> DocumentContext:
        document = context.document
        candidates = context.candidate_pages
        if not candidates:
            Log.info(f"No signature pages found in '{document.name}'")
            document.advance_progress(100)
            return context

        processed = 0
        for start in range(0, len(candidates), self._chunk_size):
            chunk = candidates[start:start + self._chunk_size]
            results = await asyncio.gather(
                *(self._extract_page(context, page_index) for page_index in chunk)
            )
            processed += len(chunk)
            document.advance_progress(
                scaled_percent(
                    processed,
                    len(candidates),
                    EXTRACTION_PROGRESS_SPAN,
                    offset=SCAN_PROGRESS_SPAN,
                )
            )
            for pages in results:
                context.extracted_pages.extend(pages)
        return context

    async def _extract_page(
        self, context: DocumentContext, page_index: int
    ) -> list[ExtractedSignaturePage]:
        document = context.document
        try:
            rendered = await asyncio.to_thread(
                self._rasterizer.render, context.raw_bytes, page_index
            )
            blocks = await self._extractor.extract(rendered)
        except Exception as exc:
            Log.error(
                f"Error extracting metadata from page {page_index} of '{document.name}': {exc}"
            )
            return []

        # The page is already a confirmed candidate, so keep it even without blocks.
        if not blocks:
            blocks = [PLACEHOLDER_BLOCK]
        return [
            ExtractedSignaturePage(
                document_id=document.id,
                document_name=document.name,
                page_index=page_index,
                party_name=block.party_name,
                signatory_name=block.signatory_name,
                capacity=block.capacity,
                copies=1,
                thumbnail_url=rendered.data_url,
                original_width=rendered.width,
                original_height=rendered.height,
            )
            for block in blocks
        ]


class MarkCompletedStep(PipelineStep):
    async def run(self, context: DocumentContext) -> DocumentContext:
        document = context.document
        document.extracted_pages = list(context.extracted_pages)
        document.status = DocumentStatus.COMPLETED
        document.progress = 100
        Log.info(
            f"Document '{document.name}' completed: "
            f"{len(document.extracted_pages)} signature page record(s)"
        )
        return context
