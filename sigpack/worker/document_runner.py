from sigpack.logging.logger import Log
from sigpack.processor.models import Document
from sigpack.processor.processor import DocumentProcessor


class DocumentRunner:
    """Run one document through the processor and contain its failure."""

    def __init__(self, processor: DocumentProcessor) -> None:
        self._processor = processor

    async def run(self, document: Document) -> None:
        """Process a single document; errors leave it in the error state."""
        try:
            await self._processor.process(document)
        except Exception as exc:
            Log.error(f"Document '{document.name}' failed: {exc}")
