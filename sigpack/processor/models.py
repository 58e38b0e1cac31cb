import math
import uuid
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

PDF_MIME_TYPE = "application/pdf"


def _new_id() -> str:
    return str(uuid.uuid4())


class DocumentStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass
class ExtractedSignaturePage:
    """One signing block found on one page of a document."""

    document_id: str
    document_name: str
    page_index: int
    party_name: str
    signatory_name: str
    capacity: str
    copies: int = 1
    thumbnail_url: str = ""
    original_width: int = 0
    original_height: int = 0
    id: str = field(default_factory=_new_id)

    @property
    def page_number(self) -> int:
        return self.page_index + 1


@dataclass
class Document:
    """An uploaded transaction file and the signature pages found in it."""

    name: str
    path: Path
    mime_type: str | None = None
    id: str = field(default_factory=_new_id)
    page_count: int = 0
    status: DocumentStatus = DocumentStatus.PENDING
    progress: int | None = None
    extracted_pages: list[ExtractedSignaturePage] = field(default_factory=list)

    @property
    def is_pdf(self) -> bool:
        return self.mime_type == PDF_MIME_TYPE or self.name.lower().endswith(".pdf")

    def advance_progress(self, value: int) -> None:
        """Raise progress to value; progress never moves backwards."""
        value = max(0, min(100, value))
        self.progress = value if self.progress is None else max(self.progress, value)


def scaled_percent(processed: int, total: int, span: int, offset: int = 0) -> int:
    """Map processed/total onto [offset, offset + span], rounding half up."""
    if total <= 0:
        return offset + span
    return offset + math.floor(processed / total * span + 0.5)
