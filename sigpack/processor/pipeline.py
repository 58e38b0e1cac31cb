from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from sigpack.processor.models import Document, ExtractedSignaturePage


@dataclass(slots=True)
class DocumentContext:
    document: Document
    raw_bytes: bytes = b""
    page_count: int = 0
    candidate_pages: list[int] = field(default_factory=list)
    extracted_pages: list[ExtractedSignaturePage] = field(default_factory=list)
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    async def run(self, context: DocumentContext) -> DocumentContext:
        raise NotImplementedError
