from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class ProductCategory:
    category_id: int
    name: str
    created_at: datetime
    description: Optional[str] = None


@dataclass(frozen=True)
class Product:
    """Domain entity: a catalog item that sale lines refer to."""

    product_id: int
    name: str
    price: Decimal
    category_id: int
    sku: str
    created_at: datetime
    description: Optional[str] = None
