import asyncio
import zipfile
from datetime import date
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from sigpack.grouping.engine import GroupingMode
from sigpack.packets.assembler import PacketAssembler
from sigpack.processor.models import Document, DocumentStatus, ExtractedSignaturePage
from sigpack.worker.document_runner import DocumentRunner
from sigpack.workspace.workspace import Workspace, archive_name, write_packets


def _make_workspace() -> tuple[Workspace, MagicMock, MagicMock]:
    runner = MagicMock(spec=DocumentRunner)
    runner.run = AsyncMock()
    assembler = MagicMock(spec=PacketAssembler)
    assembler.assemble = AsyncMock(return_value={"Acme Corp.pdf": b"%PDF"})
    assembler.extract_single_page = AsyncMock(return_value=b"%PDF-one")
    return Workspace(runner, assembler), runner, assembler


def _attach_record(
    document: Document,
    page_index: int,
    party_name: str = "Acme Corp",
    signatory_name: str = "Jane Smith",
) -> ExtractedSignaturePage:
    record = ExtractedSignaturePage(
        document_id=document.id,
        document_name=document.name,
        page_index=page_index,
        party_name=party_name,
        signatory_name=signatory_name,
        capacity="Director",
    )
    document.extracted_pages.append(record)
    document.status = DocumentStatus.COMPLETED
    return record


class TestAddFiles:
    def test_pdf_starts_pending(self) -> None:
        workspace, _runner, _assembler = _make_workspace()
        [document] = workspace.add_files([Path("/tmp/SPA.pdf")])
        assert document.status is DocumentStatus.PENDING
        assert document.name == "SPA.pdf"
        assert document.mime_type == "application/pdf"

    def test_non_pdf_is_marked_error(self) -> None:
        workspace, _runner, _assembler = _make_workspace()
        [document] = workspace.add_files([Path("/tmp/notes.txt")])
        assert document.status is DocumentStatus.ERROR

    def test_keeps_upload_order(self) -> None:
        workspace, _runner, _assembler = _make_workspace()
        workspace.add_files([Path("b.pdf"), Path("a.pdf")])
        assert [d.name for d in workspace.documents] == ["b.pdf", "a.pdf"]


class TestProcessPending:
    def test_runs_only_pending_documents(self) -> None:
        workspace, runner, _assembler = _make_workspace()
        pdf, _txt = workspace.add_files([Path("SPA.pdf"), Path("notes.txt")])

        asyncio.run(workspace.process_pending())

        runner.run.assert_awaited_once_with(pdf)

    def test_documents_run_concurrently(self) -> None:
        workspace, runner, _assembler = _make_workspace()
        workspace.add_files([Path("SPA.pdf"), Path("NDA.pdf")])
        started: list[str] = []

        async def run(document: Document) -> None:
            started.append(document.name)
            await asyncio.sleep(0)
            # Both documents have started before either finishes.
            assert len(started) == 2

        runner.run.side_effect = run

        asyncio.run(workspace.process_pending())

        assert sorted(started) == ["NDA.pdf", "SPA.pdf"]


class TestRemoveDocument:
    def test_removes_document_and_its_records(self) -> None:
        workspace, _runner, _assembler = _make_workspace()
        spa, nda = workspace.add_files([Path("SPA.pdf"), Path("NDA.pdf")])
        _attach_record(spa, 3)
        kept = _attach_record(nda, 1)

        workspace.remove_document(spa.id)

        assert workspace.documents == [nda]
        assert workspace.records() == [kept]
        assert nda.status is DocumentStatus.COMPLETED

    def test_unknown_document_raises(self) -> None:
        workspace, _runner, _assembler = _make_workspace()
        with pytest.raises(KeyError):
            workspace.remove_document("missing")

    def test_in_flight_results_for_removed_document_are_dropped(self) -> None:
        workspace, runner, _assembler = _make_workspace()
        [document] = workspace.add_files([Path("SPA.pdf")])

        async def run(doc: Document) -> None:
            await asyncio.sleep(0)
            _attach_record(doc, 3)

        runner.run.side_effect = run

        async def scenario() -> None:
            task = asyncio.create_task(workspace.process_pending())
            await asyncio.sleep(0)
            workspace.remove_document(document.id)
            await task

        asyncio.run(scenario())

        assert workspace.documents == []
        assert workspace.records() == []


class TestRecordEdits:
    def test_update_fields(self) -> None:
        workspace, _runner, _assembler = _make_workspace()
        [document] = workspace.add_files([Path("SPA.pdf")])
        record = _attach_record(document, 3, party_name="", signatory_name="")

        workspace.update_record(
            record.id,
            party_name="Beta LLC",
            signatory_name="John Roe",
            capacity="Manager",
            copies=3,
        )

        assert (record.party_name, record.signatory_name, record.capacity, record.copies) == (
            "Beta LLC",
            "John Roe",
            "Manager",
            3,
        )

    def test_update_leaves_unspecified_fields(self) -> None:
        workspace, _runner, _assembler = _make_workspace()
        [document] = workspace.add_files([Path("SPA.pdf")])
        record = _attach_record(document, 3)

        workspace.update_record(record.id, copies=0)

        assert record.copies == 0
        assert record.party_name == "Acme Corp"

    def test_negative_copies_rejected(self) -> None:
        workspace, _runner, _assembler = _make_workspace()
        [document] = workspace.add_files([Path("SPA.pdf")])
        record = _attach_record(document, 3)

        with pytest.raises(ValueError, match="copies"):
            workspace.update_record(record.id, copies=-1)
        assert record.copies == 1

    def test_unknown_record_raises(self) -> None:
        workspace, _runner, _assembler = _make_workspace()
        with pytest.raises(KeyError):
            workspace.update_record("missing", party_name="x")

    def test_delete_record(self) -> None:
        workspace, _runner, _assembler = _make_workspace()
        [document] = workspace.add_files([Path("SPA.pdf")])
        removed = _attach_record(document, 3)
        kept = _attach_record(document, 4)

        workspace.delete_record(removed.id)

        assert workspace.records() == [kept]
        with pytest.raises(KeyError):
            workspace.delete_record(removed.id)

    def test_edit_regroups_on_next_view(self) -> None:
        workspace, _runner, _assembler = _make_workspace()
        [document] = workspace.add_files([Path("SPA.pdf")])
        record = _attach_record(document, 3, party_name="")
        _attach_record(document, 4, party_name="Acme Corp")

        workspace.update_record(record.id, party_name="Beta LLC")

        groups = workspace.view(GroupingMode.COUNTERPARTY).groups()
        assert list(groups) == ["Acme Corp", "Beta LLC"]
        assert groups["Beta LLC"] == [record]


class TestDerivedViews:
    def test_known_parties_sorted_and_unique(self) -> None:
        workspace, _runner, _assembler = _make_workspace()
        spa, nda = workspace.add_files([Path("SPA.pdf"), Path("NDA.pdf")])
        _attach_record(spa, 3, party_name="Beta LLC")
        _attach_record(spa, 4, party_name="Acme Corp")
        _attach_record(nda, 1, party_name="Acme Corp")

        assert workspace.known_parties() == ["Acme Corp", "Beta LLC"]

    def test_export_uses_sorted_snapshot(self) -> None:
        workspace, _runner, assembler = _make_workspace()
        spa, nda = workspace.add_files([Path("SPA.pdf"), Path("NDA.pdf")])
        spa_record = _attach_record(spa, 3)
        nda_record = _attach_record(nda, 1)

        packets = asyncio.run(workspace.export_packets(GroupingMode.AGREEMENT))

        assert packets == {"Acme Corp.pdf": b"%PDF"}
        documents, records, mode = assembler.assemble.call_args.args
        assert documents == [spa, nda]
        assert list(records) == [nda_record, spa_record]
        assert mode is GroupingMode.AGREEMENT

    def test_preview_page(self) -> None:
        workspace, _runner, assembler = _make_workspace()
        [document] = workspace.add_files([Path("SPA.pdf")])
        record = _attach_record(document, 3)

        assert asyncio.run(workspace.preview_page(record.id)) == b"%PDF-one"
        assembler.extract_single_page.assert_awaited_once_with(document, 3)


class TestWritePackets:
    def test_writes_each_packet(self, tmp_path: Path) -> None:
        written = write_packets({"A.pdf": b"%PDF-a", "B.pdf": b"%PDF-b"}, tmp_path / "out")
        assert [p.name for p in written] == ["A.pdf", "B.pdf"]
        assert (tmp_path / "out" / "B.pdf").read_bytes() == b"%PDF-b"

    def test_writes_zip_archive(self, tmp_path: Path) -> None:
        [archive] = write_packets({"A.pdf": b"%PDF-a"}, tmp_path, archive="pack.zip")
        with zipfile.ZipFile(archive) as bundle:
            assert bundle.namelist() == ["A.pdf"]
            assert bundle.read("A.pdf") == b"%PDF-a"

    def test_archive_name(self) -> None:
        name = archive_name(GroupingMode.COUNTERPARTY, date(2024, 5, 1))
        assert name == "SignaturePack_counterparty_2024-05-01.zip"
