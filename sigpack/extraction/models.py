from dataclasses import dataclass, field

UNKNOWN_PARTY = "Unknown Party"
DEFAULT_CAPACITY = "Signatory"


@dataclass(frozen=True)
class SignatureBlock:
    """One signing block read from a signature page."""

    party_name: str = ""
    signatory_name: str = ""
    capacity: str = ""


@dataclass(frozen=True)
class ExtractionOk:
    """Oracle response that parsed into zero or more signing blocks."""

    blocks: list[SignatureBlock] = field(default_factory=list)


@dataclass(frozen=True)
class ExtractionMalformed:
    """Oracle call that failed or returned content that could not be parsed."""

    reason: str


ExtractionResult = ExtractionOk | ExtractionMalformed
