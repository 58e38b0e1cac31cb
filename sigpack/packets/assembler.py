import asyncio
from collections.abc import Iterable, Sequence

import pymupdf

from sigpack.grouping.engine import GroupingMode, build_view
from sigpack.logging.logger import Log
from sigpack.packets.naming import DEFAULT_PACKET_NAME, disambiguate, sanitize_packet_name
from sigpack.processor.exceptions import PacketAssemblyError
from sigpack.processor.file_loader import FileLoader
from sigpack.processor.models import Document, ExtractedSignaturePage


class PacketAssembler:
    """Builds one print-ready PDF per group of signature pages.

    Pages inside a packet are ordered by document name then page index,
    whatever the grouping mode, and each page is repeated once per copy.
    Any failure aborts the whole run.
    """

    def __init__(
        self,
        file_loader: FileLoader,
        fallback_name: str = DEFAULT_PACKET_NAME,
    ) -> None:
        self._file_loader = file_loader
        self._fallback_name = fallback_name

    async def assemble(
        self,
        documents: Sequence[Document],
        records: Iterable[ExtractedSignaturePage],
        mode: GroupingMode,
    ) -> dict[str, bytes]:
        included = [record for record in records if record.copies > 0]
        groups = build_view(included, mode).groups()
        documents_by_id = {document.id: document for document in documents}
        sources: dict[str, pymupdf.Document] = {}
        packets: dict[str, bytes] = {}

        try:
            for group_name, pages in groups.items():
                pages = sorted(pages, key=lambda page: (page.document_name, page.page_index))
                output = pymupdf.open()  # type: ignore[no-untyped-call]
                try:
                    for page in pages:
                        source = await self._source_for(page, documents_by_id, sources)
                        self._copy_page(output, source, page)
                    file_name = disambiguate(
                        sanitize_packet_name(group_name, self._fallback_name), set(packets)
                    )
                    packets[file_name] = output.tobytes(garbage=3, deflate=True)
                finally:
                    output.close()
                Log.info(f"Assembled packet '{file_name}' with {len(pages)} signature page(s)")
        except PacketAssemblyError:
            raise
        except Exception as exc:
            raise PacketAssemblyError(f"Failed to assemble signature packets: {exc}") from exc
        finally:
            for source in sources.values():
                source.close()
        return packets

    async def extract_single_page(self, document: Document, page_index: int) -> bytes:
        """Return a one-page PDF holding the given page of the document."""
        try:
            raw_bytes = await asyncio.to_thread(self._file_loader.load, document)
            with pymupdf.open(stream=raw_bytes, filetype="pdf") as source:  # type: ignore[no-untyped-call]
                if not 0 <= page_index < source.page_count:
                    raise PacketAssemblyError(
                        f"Page {page_index + 1} does not exist in '{document.name}'"
                    )
                with pymupdf.open() as output:  # type: ignore[no-untyped-call]
                    output.insert_pdf(source, from_page=page_index, to_page=page_index)
                    return output.tobytes()
        except PacketAssemblyError:
            raise
        except Exception as exc:
            raise PacketAssemblyError(
                f"Failed to extract page {page_index} of '{document.name}': {exc}"
            ) from exc

    async def _source_for(
        self,
        page: ExtractedSignaturePage,
        documents_by_id: dict[str, Document],
        sources: dict[str, pymupdf.Document],
    ) -> pymupdf.Document:
        source = sources.get(page.document_id)
        if source is not None:
            return source
        document = documents_by_id.get(page.document_id)
        if document is None:
            raise PacketAssemblyError(
                f"Source document '{page.document_name}' is not available"
            )
        raw_bytes = await asyncio.to_thread(self._file_loader.load, document)
        source = pymupdf.open(stream=raw_bytes, filetype="pdf")  # type: ignore[no-untyped-call]
        sources[page.document_id] = source
        return source

    @staticmethod
    def _copy_page(
        output: pymupdf.Document,
        source: pymupdf.Document,
        page: ExtractedSignaturePage,
    ) -> None:
        if not 0 <= page.page_index < source.page_count:
            raise PacketAssemblyError(
                f"Page {page.page_number} does not exist in '{page.document_name}'"
            )
        for _ in range(page.copies):
            output.insert_pdf(source, from_page=page.page_index, to_page=page.page_index)
