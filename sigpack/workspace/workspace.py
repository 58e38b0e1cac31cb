import asyncio
import mimetypes
import zipfile
from collections.abc import Iterable
from datetime import date
from pathlib import Path

from sigpack.grouping.engine import GroupedView, GroupingMode, build_view
from sigpack.logging.logger import Log
from sigpack.packets.assembler import PacketAssembler
from sigpack.processor.models import Document, DocumentStatus, ExtractedSignaturePage
from sigpack.worker.document_runner import DocumentRunner


def archive_name(mode: GroupingMode, day: date | None = None) -> str:
    day = day or date.today()
    return f"SignaturePack_{mode.value}_{day.isoformat()}.zip"


class Workspace:
    """Owns the uploaded documents and their signature page records.

    Each document is mutated only by its own pipeline run; record edits go
    through the methods below. Removing a document detaches it, so results of
    a run still in flight for it are dropped.
    """

    def __init__(self, runner: DocumentRunner, assembler: PacketAssembler) -> None:
        self._runner = runner
        self._assembler = assembler
        self._documents: dict[str, Document] = {}

    @property
    def documents(self) -> list[Document]:
        return list(self._documents.values())

    def add_files(self, paths: Iterable[Path]) -> list[Document]:
        """Register files; anything that is not a PDF starts in the error state."""
        added: list[Document] = []
        for path in paths:
            mime_type, _ = mimetypes.guess_type(path.name)
            document = Document(name=path.name, path=path, mime_type=mime_type)
            if not document.is_pdf:
                document.status = DocumentStatus.ERROR
                Log.warning(f"Rejected '{document.name}': only PDF documents are supported")
            self._documents[document.id] = document
            added.append(document)
        return added

    async def process_pending(self) -> None:
        """Run every pending document concurrently and wait for all of them."""
        pending = [d for d in self._documents.values() if d.status is DocumentStatus.PENDING]
        Log.info(f"Processing {len(pending)} pending document(s)")
        await asyncio.gather(*(self._runner.run(document) for document in pending))

    def remove_document(self, document_id: str) -> None:
        del self._documents[document_id]

    def records(self) -> list[ExtractedSignaturePage]:
        return [page for document in self._documents.values() for page in document.extracted_pages]

    def find_record(self, record_id: str) -> ExtractedSignaturePage:
        for record in self.records():
            if record.id == record_id:
                return record
        raise KeyError(f"Unknown signature page record: {record_id}")

    def update_record(
        self,
        record_id: str,
        *,
        party_name: str | None = None,
        signatory_name: str | None = None,
        capacity: str | None = None,
        copies: int | None = None,
    ) -> ExtractedSignaturePage:
        record = self.find_record(record_id)
        if copies is not None:
            if copies < 0:
                raise ValueError("copies must be zero or greater")
            record.copies = copies
        if party_name is not None:
            record.party_name = party_name
        if signatory_name is not None:
            record.signatory_name = signatory_name
        if capacity is not None:
            record.capacity = capacity
        return record

    def delete_record(self, record_id: str) -> None:
        for document in self._documents.values():
            remaining = [page for page in document.extracted_pages if page.id != record_id]
            if len(remaining) != len(document.extracted_pages):
                document.extracted_pages = remaining
                return
        raise KeyError(f"Unknown signature page record: {record_id}")

    def known_parties(self) -> list[str]:
        return sorted({record.party_name for record in self.records()})

    def view(self, mode: GroupingMode) -> GroupedView:
        return build_view(self.records(), mode)

    async def export_packets(self, mode: GroupingMode) -> dict[str, bytes]:
        view = self.view(mode)
        return await self._assembler.assemble(self.documents, view.records, mode)

    async def preview_page(self, record_id: str) -> bytes:
        record = self.find_record(record_id)
        document = self._documents[record.document_id]
        return await self._assembler.extract_single_page(document, record.page_index)


def write_packets(
    packets: dict[str, bytes],
    output_dir: Path,
    archive: str | None = None,
) -> list[Path]:
    """Write packets to output_dir, or into a single ZIP archive when named."""
    output_dir.mkdir(parents=True, exist_ok=True)
    if archive is not None:
        archive_path = output_dir / archive
        with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as bundle:
            for file_name, data in packets.items():
                bundle.writestr(file_name, data)
        return [archive_path]
    written: list[Path] = []
    for file_name, data in packets.items():
        path = output_dir / file_name
        path.write_bytes(data)
        written.append(path)
    return written
