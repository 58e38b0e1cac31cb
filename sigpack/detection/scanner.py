import asyncio
from collections.abc import Callable

from sigpack.detection.classifier import is_signature_candidate
from sigpack.logging.logger import Log
from sigpack.pdf.base import BasePdfTextExtractor

ProgressSink = Callable[[int, int], None]


class CandidateScanner:
    """Finds candidate signature pages by scanning page text in bounded batches.

    Batches run one after another; pages inside a batch are extracted
    concurrently. The returned indices are zero-based and ascending.
    """

    DEFAULT_BATCH_SIZE = 10

    def __init__(
        self,
        text_extractor: BasePdfTextExtractor,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self._text_extractor = text_extractor
        self._batch_size = batch_size

    async def scan(
        self,
        pdf_bytes: bytes,
        page_count: int,
        on_progress: ProgressSink | None = None,
        document_name: str = "",
    ) -> list[int]:
        candidates: list[int] = []
        processed = 0

        for start in range(0, page_count, self._batch_size):
            batch = range(start, min(start + self._batch_size, page_count))
            results = await asyncio.gather(
                *(self._check_page(pdf_bytes, index, document_name) for index in batch)
            )
            candidates.extend(index for index, hit in zip(batch, results) if hit)

            processed += len(batch)
            if on_progress is not None:
                on_progress(processed, page_count)

        Log.info(
            f"Scanned {page_count} pages of '{document_name}': "
            f"{len(candidates)} candidate(s)"
        )
        return sorted(set(candidates))

    async def _check_page(self, pdf_bytes: bytes, page_index: int, document_name: str) -> bool:
        try:
            text = await asyncio.to_thread(
                self._text_extractor.extract_page, pdf_bytes, page_index + 1
            )
            return is_signature_candidate(text)
        except Exception as exc:
            Log.warning(f"Error scanning page {page_index + 1} of '{document_name}': {exc}")
            return False
