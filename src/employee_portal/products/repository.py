from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Product, ProductCategory


class ProductRepository(Protocol):
    def get_by_id(self, product_id: int) -> Optional[Product]:
        raise NotImplementedError

    def list_by_category(self, category_id: int) -> Sequence[Product]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Product]:
        """Ordered by name."""

        raise NotImplementedError

    def list_categories(self) -> Sequence[ProductCategory]:
        raise NotImplementedError
