from pathlib import Path

import pytest

from sigpack.processor.exceptions import FileReadError, UnsupportedDocumentError
from sigpack.processor.file_loader import FileLoader
from sigpack.processor.models import Document


class TestLoadReturnsBytes:
    def test_returns_file_bytes(self, tmp_path: Path) -> None:
        path = tmp_path / "SPA.pdf"
        path.write_bytes(b"%PDF test content")

        result = FileLoader().load(Document(name="SPA.pdf", path=path))

        assert result == b"%PDF test content"

    def test_accepts_pdf_mime_type_without_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "upload"
        path.write_bytes(b"%PDF other")
        document = Document(name="upload", path=path, mime_type="application/pdf")

        assert FileLoader().load(document) == b"%PDF other"


class TestLoadRaises:
    def test_raises_for_non_pdf(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.docx"
        path.write_bytes(b"PK")
        with pytest.raises(UnsupportedDocumentError, match="notes.docx"):
            FileLoader().load(Document(name="notes.docx", path=path))

    def test_raises_when_file_missing(self, tmp_path: Path) -> None:
        document = Document(name="missing.pdf", path=tmp_path / "missing.pdf")
        with pytest.raises(FileReadError, match="missing"):
            FileLoader().load(document)
