"""Deterministic ordering and grouping of signature page records."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from sigpack.processor.models import ExtractedSignaturePage

UNKNOWN_SIGNATORY = "Unknown Signatory"


class GroupingMode(str, Enum):
    AGREEMENT = "agreement"
    COUNTERPARTY = "counterparty"
    SIGNATORY = "signatory"


def group_key(record: ExtractedSignaturePage, mode: GroupingMode) -> str:
    """Return the label of the group a record belongs to under the given mode."""
    if mode == GroupingMode.AGREEMENT:
        return record.document_name
    if mode == GroupingMode.COUNTERPARTY:
        return record.party_name
    return record.signatory_name or UNKNOWN_SIGNATORY


def sort_key(record: ExtractedSignaturePage, mode: GroupingMode) -> tuple[object, ...]:
    if mode == GroupingMode.AGREEMENT:
        return (record.document_name, record.page_index)
    if mode == GroupingMode.COUNTERPARTY:
        return (record.party_name, record.document_name, record.page_index)
    # The unknown-signatory group collates after every named one.
    label = group_key(record, mode)
    return (label == UNKNOWN_SIGNATORY, label, record.party_name)


def sort_records(
    records: Iterable[ExtractedSignaturePage], mode: GroupingMode
) -> list[ExtractedSignaturePage]:
    return sorted(records, key=lambda record: sort_key(record, mode))


@dataclass(frozen=True)
class GroupedView:
    """Records in display order and the group labels in first-seen order."""

    mode: GroupingMode
    records: tuple[ExtractedSignaturePage, ...]
    labels: tuple[str, ...]

    def groups(self) -> dict[str, list[ExtractedSignaturePage]]:
        grouped: dict[str, list[ExtractedSignaturePage]] = {label: [] for label in self.labels}
        for record in self.records:
            grouped[group_key(record, self.mode)].append(record)
        return grouped


def build_view(records: Iterable[ExtractedSignaturePage], mode: GroupingMode) -> GroupedView:
    """Order records for the given mode and collect the distinct group labels."""
    ordered = sort_records(records, mode)
    labels = dict.fromkeys(group_key(record, mode) for record in ordered)
    return GroupedView(mode=mode, records=tuple(ordered), labels=tuple(labels))
