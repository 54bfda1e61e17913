"""Tests for catalog product records."""

from __future__ import annotations

from decimal import Decimal

from ymm_fitment.domain.imports import ImportReport, RowFailed, RowImported
from ymm_fitment.domain.product import ProductDetail, ProductImage, strip_tags
from ymm_fitment.domain.store import clean_store_hash


def test_from_catalog_payload_maps_full_record() -> None:
    product = ProductDetail.from_catalog_payload(
        {
            "id": 112,
            "name": "Leveling Kit",
            "price": 189.5,
            "sku": "LK-F150",
            "images": [
                {
                    "url_standard": "https://cdn.example.com/std.jpg",
                    "url_thumbnail": "https://cdn.example.com/thumb.jpg",
                    "description": "Front",
                    "is_thumbnail": True,
                }
            ],
            "custom_url": {"url": "/leveling-kit/", "is_customized": False},
            "description": "<p>2 inch <b>front</b> lift</p>",
        }
    )

    assert product.id == "112"
    assert product.price == Decimal("189.5")
    assert product.custom_url == "/leveling-kit/"
    assert product.description == "2 inch front lift"
    assert product.images == [
        ProductImage(
            url_standard="https://cdn.example.com/std.jpg",
            url_thumbnail="https://cdn.example.com/thumb.jpg",
            description="Front",
            is_thumbnail=True,
        )
    ]


def test_from_catalog_payload_tolerates_missing_fields() -> None:
    """Missing images, price and description fall back to defaults."""
    product = ProductDetail.from_catalog_payload({"id": 7, "name": "Bare"})

    assert product.price == Decimal("0")
    assert product.images == []
    assert product.sku == ""
    assert product.custom_url is None
    assert product.description == ""


def test_from_catalog_payload_ignores_unparseable_price() -> None:
    product = ProductDetail.from_catalog_payload({"id": 7, "name": "Odd", "price": "n/a"})

    assert product.price == Decimal("0")


def test_strip_tags_handles_none() -> None:
    assert strip_tags(None) == ""


def test_clean_store_hash_drops_context_prefix() -> None:
    assert clean_store_hash("stores/abc123") == "abc123"
    assert clean_store_hash("abc123") == "abc123"


def test_import_report_counts_outcomes() -> None:
    report = ImportReport(
        outcomes=[
            RowImported(row_number=1, vehicle_id="a"),
            RowFailed(row_number=2, message="make: Must not be empty"),
            RowImported(row_number=3, vehicle_id="b"),
        ]
    )

    assert report.imported == 2
    assert report.failed == 1
    assert [f.row_number for f in report.failures] == [2]
