import re

ILLEGAL_FILENAME_CHARS = re.compile(r'[/\\?%*:|"<>\x00-\x1f]')
PDF_EXTENSION = ".pdf"
DEFAULT_PACKET_NAME = "Signature_Pack"


def sanitize_packet_name(group_name: str, fallback: str = DEFAULT_PACKET_NAME) -> str:
    """Strip characters illegal in file names and ensure a .pdf extension."""
    safe_name = ILLEGAL_FILENAME_CHARS.sub("", group_name).strip()
    if not safe_name:
        safe_name = fallback
    if not safe_name.lower().endswith(PDF_EXTENSION):
        safe_name += PDF_EXTENSION
    return safe_name


def disambiguate(file_name: str, taken: set[str]) -> str:
    """Return file_name, or 'stem (n).pdf' with the lowest n >= 2 not in taken.

    Names are compared case-insensitively, since packets may be written to
    case-insensitive file systems or extracted from one archive.
    """
    folded = {name.casefold() for name in taken}
    if file_name.casefold() not in folded:
        return file_name
    stem = file_name[: -len(PDF_EXTENSION)]
    suffix = file_name[-len(PDF_EXTENSION):]
    counter = 2
    while f"{stem} ({counter}){suffix}".casefold() in folded:
        counter += 1
    return f"{stem} ({counter}){suffix}"
