"""Per-row outcomes for bulk imports.

Each input row produces exactly one tagged outcome, so a malformed row is
reported alongside the successful ones instead of aborting the batch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True, slots=True)
class RowImported:
    row_number: int
    vehicle_id: str
    product_id: str | None = None
    created: bool = True  # False when the row matched something already stored


@dataclass(frozen=True, slots=True)
class RowFailed:
    row_number: int
    message: str
    errors: list[dict[str, str]] = field(default_factory=list)


ImportRowOutcome = Union[RowImported, RowFailed]


@dataclass(frozen=True, slots=True)
class ImportReport:
    outcomes: list[ImportRowOutcome]

    @property
    def imported(self) -> int:
        return sum(1 for outcome in self.outcomes if isinstance(outcome, RowImported))

    @property
    def failed(self) -> int:
        return sum(1 for outcome in self.outcomes if isinstance(outcome, RowFailed))

    @property
    def failures(self) -> list[RowFailed]:
        return [outcome for outcome in self.outcomes if isinstance(outcome, RowFailed)]
