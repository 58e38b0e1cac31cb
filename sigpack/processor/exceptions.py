class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class UnsupportedDocumentError(ProcessorError):
    """Raised when an uploaded file is not a PDF document."""


class FileReadError(ProcessorError):
    """Raised when a file cannot be read from disk."""


class PacketAssemblyError(ProcessorError):
    """Raised when signature packets cannot be built."""
