from __future__ import annotations

import re
import secrets
import string
from datetime import date
from typing import Callable, Optional

from ..core.constants import INVOICE_PREFIX, INVOICE_SUFFIX_LENGTH

INVOICE_ALPHABET = string.ascii_uppercase + string.digits
INVOICE_PATTERN = re.compile(r"^INV-\d{8}-[A-Z0-9]{6}$")


def generate_invoice_number(sale_date: date, *, choice: Optional[Callable[[str], str]] = None) -> str:
    """INV-<YYYYMMDD of the sale date>-<6 random uppercase letters/digits>."""
    pick = choice or secrets.choice
    suffix = "".join(pick(INVOICE_ALPHABET) for _ in range(INVOICE_SUFFIX_LENGTH))
    return f"{INVOICE_PREFIX}-{sale_date:%Y%m%d}-{suffix}"


def is_invoice_number(value: str) -> bool:
    return bool(INVOICE_PATTERN.match(value or ""))
