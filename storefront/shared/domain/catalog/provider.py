"""Mock product source.

Stands in for a product API: returns a fixed list, never fails. The latency is
simulated by the loader, not here.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Protocol

from storefront.shared.domain.models import Product

_IMAGE_BASE = "https://placehold.co/600x400/22c55e/ffffff?text="

MOCK_PRODUCTS: tuple[Product, ...] = (
    Product(
        id="prod1",
        name="Modern Laptop",
        description=(
            "A sleek, powerful laptop for all your professional and creative needs. "
            "Featuring a stunning Retina display and long battery life."
        ),
        price=Decimal("999.99"),
        image_url=f"{_IMAGE_BASE}Laptop",
    ),
    Product(
        id="prod2",
        name="Wireless Mouse",
        description=(
            "Ergonomic and precise, this mouse offers seamless connectivity and a "
            "comfortable grip for hours of work or gaming."
        ),
        price=Decimal("49.99"),
        image_url=f"{_IMAGE_BASE}Mouse",
    ),
    Product(
        id="prod3",
        name="Mechanical Keyboard",
        description=(
            "Experience satisfying tactile feedback with every keystroke. Built to last "
            "with a durable aluminum frame and customizable RGB lighting."
        ),
        price=Decimal("129.99"),
        image_url=f"{_IMAGE_BASE}Keyboard",
    ),
    Product(
        id="prod4",
        name="4K Monitor",
        description=(
            "Immerse yourself in stunning detail with this 27-inch 4K monitor. "
            "Perfect for designers, video editors, and gamers."
        ),
        price=Decimal("349.99"),
        image_url=f"{_IMAGE_BASE}Monitor",
    ),
    Product(
        id="prod5",
        name="Noise-Cancelling Headphones",
        description=(
            "Tune out the world with these over-ear headphones. Delivers crystal-clear "
            "audio and industry-leading noise cancellation."
        ),
        price=Decimal("199.99"),
        image_url=f"{_IMAGE_BASE}Headphones",
    ),
    Product(
        id="prod6",
        name="Webcam",
        description=(
            "High-definition video for professional-quality calls and streaming. "
            "Features auto-focus and a wide-angle lens."
        ),
        price=Decimal("69.99"),
        image_url=f"{_IMAGE_BASE}Webcam",
    ),
)


class CatalogProvider(Protocol):
    def fetch_catalog(self) -> List[Product]:
        ...


class MockCatalogProvider:
    """Returns the demo products."""

    def __init__(self, products: tuple[Product, ...] = MOCK_PRODUCTS):
        self._products = products
        self.fetch_count = 0

    def fetch_catalog(self) -> List[Product]:
        self.fetch_count += 1
        return list(self._products)
