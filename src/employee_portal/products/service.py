from __future__ import annotations

from typing import Optional, Sequence

from ..common.formatting import money_to_json
from .model import Product, ProductCategory
from .repository import ProductRepository


class ProductService:
    def __init__(self, products: ProductRepository):
        self._products = products

    def categories(self) -> Sequence[ProductCategory]:
        return self._products.list_categories()

    def products(self, category_id: Optional[int] = None) -> Sequence[Product]:
        if category_id is None:
            return self._products.list_all()
        return self._products.list_by_category(category_id)


def category_to_json(category: ProductCategory) -> dict:
    return {
        "id": category.category_id,
        "name": category.name,
        "description": category.description,
    }


def product_to_json(product: Product) -> dict:
    return {
        "id": product.product_id,
        "name": product.name,
        "description": product.description,
        "price": money_to_json(product.price),
        "categoryId": product.category_id,
        "sku": product.sku,
    }
