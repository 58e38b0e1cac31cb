from sigpack.processor.exceptions import FileReadError, UnsupportedDocumentError
from sigpack.processor.models import Document


class FileLoader:
    """Reads the raw bytes behind a document."""

    def load(self, document: Document) -> bytes:
        """Read document bytes from disk.

        Raises:
            UnsupportedDocumentError: if the document is not a PDF.
            FileReadError: if the file is missing or cannot be read.
        """
        if not document.is_pdf:
            raise UnsupportedDocumentError(f"'{document.name}' is not a PDF document")
        if not document.path.exists():
            raise FileReadError(f"File not found: {document.path}")
        try:
            return document.path.read_bytes()
        except OSError as exc:
            raise FileReadError(f"Failed to read {document.path}: {exc}") from exc
