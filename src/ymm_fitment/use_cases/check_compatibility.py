from __future__ import annotations

from dataclasses import dataclass

from ymm_fitment.domain.errors import ValidationError
from ymm_fitment.domain.vehicle import MIN_MODEL_YEAR, clean_product_id, max_model_year
from ymm_fitment.use_cases.find_compatible_ranges import VehicleSelection
from ymm_fitment.use_cases.resolve_compatible_products import ResolveCompatibleProducts


@dataclass(frozen=True, slots=True)
class CompatibilityCheck:
    product_id: str
    compatible: bool
    selection: VehicleSelection


class CheckCompatibility:
    """
    Answers whether one product fits one Year/Make/Model selection.

    Uses the same matching rule as the storefront search, so a product is
    compatible exactly when the search for that selection would list it.
    Unlike the search, every field is required.
    """

    def __init__(self, resolver: ResolveCompatibleProducts) -> None:
        self._resolver = resolver

    def execute(self, product_id: str, selection: VehicleSelection) -> CompatibilityCheck:
        """
        Raises:
            ValidationError: If product_id, make or model is blank, or the year is out of range
        """
        product_id = clean_product_id(product_id)
        selection = _validated(selection)

        compatible = product_id in self._resolver.execute(selection).product_ids
        return CompatibilityCheck(
            product_id=product_id,
            compatible=compatible,
            selection=selection,
        )


def _validated(selection: VehicleSelection) -> VehicleSelection:
    errors: list[dict[str, str]] = []

    upper = max_model_year()
    if not MIN_MODEL_YEAR <= selection.year <= upper:
        errors.append(
            {
                "field": "year",
                "message": f"Must be between {MIN_MODEL_YEAR} and {upper}",
                "code": "OUT_OF_RANGE",
            }
        )

    make = (selection.make or "").strip()
    model = (selection.model or "").strip()
    if not make:
        errors.append({"field": "make", "message": "Must not be empty", "code": "REQUIRED"})
    if not model:
        errors.append({"field": "model", "message": "Must not be empty", "code": "REQUIRED"})

    if errors:
        raise ValidationError(errors=errors)

    return VehicleSelection(
        year=selection.year,
        make=make,
        model=model,
        store_hash=selection.store_hash,
    )
