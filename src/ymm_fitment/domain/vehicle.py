from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

from ymm_fitment.domain.errors import PagingValidationError, ValidationError


MIN_MODEL_YEAR = 1900
MAX_LIST_LIMIT = 200
MAX_PRODUCT_ID_LENGTH = 64


def max_model_year() -> int:
    """Latest model year accepted (two years past the current calendar year)."""
    return datetime.now(timezone.utc).year + 2


@dataclass(frozen=True, slots=True)
class VehicleRange:
    """A make/model paired with an inclusive span of model years."""

    id: str
    make: str
    model: str
    year_start: int
    year_end: int
    is_active: bool = True
    store_hash: str | None = None

    def covers_year(self, year: int) -> bool:
        return self.year_start <= year <= self.year_end

    def matches(self, year: int, make: str, model: str) -> bool:
        """Compatibility rule: active, exact make/model, year inside the span."""
        return (
            self.is_active
            and self.make == make
            and self.model == model
            and self.covers_year(year)
        )


@dataclass(frozen=True, slots=True)
class VehicleRangeDraft:
    """Validated input for creating or replacing a vehicle range."""

    make: str
    model: str
    year_start: int
    year_end: int
    is_active: bool = True
    store_hash: str | None = None

    def validate(self) -> None:
        """
        Validate the draft against the vehicle range invariants.

        Raises:
            ValidationError: With one entry per offending field
        """
        errors: list[dict[str, str]] = []

        if not self.make or not self.make.strip():
            errors.append({"field": "make", "message": "Must not be empty", "code": "REQUIRED"})
        if not self.model or not self.model.strip():
            errors.append({"field": "model", "message": "Must not be empty", "code": "REQUIRED"})

        upper = max_model_year()
        for field_name in ("year_start", "year_end"):
            value = getattr(self, field_name)
            if not MIN_MODEL_YEAR <= value <= upper:
                errors.append(
                    {
                        "field": field_name,
                        "message": f"Must be between {MIN_MODEL_YEAR} and {upper}",
                        "code": "OUT_OF_RANGE",
                    }
                )

        if self.year_start > self.year_end:
            errors.append(
                {
                    "field": "year_end",
                    "message": "Must be greater than or equal to year_start",
                    "code": "INVALID_RANGE",
                }
            )

        if errors:
            raise ValidationError(errors=errors)

    def to_range(self, range_id: str) -> VehicleRange:
        return VehicleRange(
            id=range_id,
            make=self.make,
            model=self.model,
            year_start=self.year_start,
            year_end=self.year_end,
            is_active=self.is_active,
            store_hash=self.store_hash,
        )

    @classmethod
    def from_mapping(
        cls, raw: Mapping[str, Any], store_hash: str | None = None
    ) -> VehicleRangeDraft:
        """
        Build a validated draft from loosely typed input (JSON object or CSV row).

        Strings are trimmed and years coerced to int. A single-year row may
        carry ``year`` instead of ``year_start``/``year_end``.

        Raises:
            ValidationError: If a field is missing, malformed or out of range
        """
        errors: list[dict[str, str]] = []

        make = _clean_text(raw.get("make"))
        model = _clean_text(raw.get("model"))

        if "year" in raw and "year_start" not in raw and "year_end" not in raw:
            year_start = year_end = _parse_year(raw.get("year"), "year", errors)
        else:
            year_start = _parse_year(raw.get("year_start"), "year_start", errors)
            year_end = _parse_year(raw.get("year_end"), "year_end", errors)

        if errors:
            raise ValidationError(errors=errors)

        draft = cls(
            make=make,
            model=model,
            year_start=year_start,
            year_end=year_end,
            is_active=_parse_bool(raw.get("is_active"), default=True),
            store_hash=raw.get("store_hash") or store_hash,
        )
        draft.validate()
        return draft


@dataclass(frozen=True, slots=True)
class ProductVehicleLink:
    """Association between an external catalog product and a vehicle range."""

    product_id: str
    vehicle_id: str


def clean_product_id(value: Any) -> str:
    """
    Trim a catalog product id and check it fits the link table column.

    Raises:
        ValidationError: If the id is blank or longer than MAX_PRODUCT_ID_LENGTH
    """
    product_id = _clean_text(value)
    if not product_id:
        raise ValidationError(
            errors=[{"field": "product_id", "message": "Is required", "code": "REQUIRED"}]
        )
    if len(product_id) > MAX_PRODUCT_ID_LENGTH:
        raise ValidationError(
            errors=[
                {
                    "field": "product_id",
                    "message": f"Must be at most {MAX_PRODUCT_ID_LENGTH} characters",
                    "code": "TOO_LONG",
                }
            ]
        )
    return product_id


@dataclass(frozen=True, slots=True)
class VehicleListFilters:
    store_hash: str | None = None
    search: str | None = None


@dataclass(frozen=True, slots=True)
class Paging:
    offset: int = 0
    limit: int = 20

    def validate(self) -> None:
        """
        Validate paging parameters.

        Raises:
            PagingValidationError: If paging parameters are invalid
        """
        if self.offset < 0:
            raise PagingValidationError("offset must be >= 0")
        if self.limit <= 0:
            raise PagingValidationError("limit must be > 0")
        if self.limit > MAX_LIST_LIMIT:
            raise PagingValidationError(f"limit must be <= {MAX_LIST_LIMIT}")


def _clean_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _parse_year(value: Any, field_name: str, errors: list[dict[str, str]]) -> int:
    if isinstance(value, bool) or value is None or value == "":
        errors.append({"field": field_name, "message": "Is required", "code": "REQUIRED"})
        return 0
    try:
        return int(str(value).strip())
    except ValueError:
        errors.append(
            {
                "field": field_name,
                "message": f"Must be an integer year: {value}",
                "code": "INVALID_YEAR",
            }
        )
        return 0


def _parse_bool(value: Any, default: bool) -> bool:
    """Missing, null or blank values fall back to ``default``."""
    if value is None:
        return default
    if isinstance(value, str):
        if not value.strip():
            return default
        return value.strip().lower() not in ("0", "false", "no")
    return bool(value)
