"""Lexical detection of execution/signature pages."""

import re

EXECUTION_TERMS: tuple[str, ...] = (
    r"Signature",
    r"Execution",
    r"Excution",
    r"Signatory",
    r"Executed",
    r"Signed",
    r"Witness",
    r"Agreed\s+and\s+Accepted",
    r"Accepted\s+by",
    r"Acknowledged\s+by",
    r"Duly\s+Authori[sz]ed",
    r"By:",
    r"Name:",
    r"Title:",
    r"Position:",
    r"Date:",
)

SIGNATURE_PAGE_PATTERN = re.compile(
    r"(?<!\w)(?:" + "|".join(EXECUTION_TERMS) + r")(?!\w)",
    re.IGNORECASE,
)


def is_signature_candidate(text: str) -> bool:
    """Return True when the page text contains any execution-related term."""
    return SIGNATURE_PAGE_PATTERN.search(text) is not None
