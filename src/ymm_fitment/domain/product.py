from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping


_TAG_PATTERN = re.compile(r"<[^>]*>")


def strip_tags(text: str | None) -> str:
    """Remove HTML/XML tags from a long-text field. Never raises."""
    if not text:
        return ""
    return _TAG_PATTERN.sub("", str(text))


@dataclass(frozen=True, slots=True)
class ProductImage:
    url_standard: str = ""
    url_thumbnail: str = ""
    description: str = ""
    is_thumbnail: bool = False


@dataclass(frozen=True, slots=True)
class ProductDetail:
    """Display data for one catalog product, as supplied by the gateway."""

    id: str
    name: str
    price: Decimal = Decimal("0")
    sku: str = ""
    images: list[ProductImage] = field(default_factory=list)
    custom_url: str | None = None
    description: str = ""

    @classmethod
    def from_catalog_payload(cls, payload: Mapping[str, Any]) -> ProductDetail:
        """
        Build a record from one catalog API product object.

        Missing images, price, sku or URL fall back to empty defaults;
        the description is stripped of markup.
        """
        custom_url = payload.get("custom_url")
        if isinstance(custom_url, Mapping):
            custom_url = custom_url.get("url")

        images = [
            ProductImage(
                url_standard=image.get("url_standard") or "",
                url_thumbnail=image.get("url_thumbnail") or "",
                description=image.get("description") or "",
                is_thumbnail=bool(image.get("is_thumbnail", False)),
            )
            for image in payload.get("images") or []
            if isinstance(image, Mapping)
        ]

        return cls(
            id=str(payload.get("id", "")),
            name=payload.get("name") or "",
            price=_to_decimal(payload.get("price")),
            sku=payload.get("sku") or "",
            images=images,
            custom_url=custom_url or None,
            description=strip_tags(payload.get("description")),
        )


def _to_decimal(value: Any) -> Decimal:
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        # str() first so floats from JSON keep their printed precision
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal("0")
