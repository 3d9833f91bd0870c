"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 10
DEFAULT_API_PAGE_LIMIT = 4
MAX_PAGE_LIMIT = 100

TAX_RATE = Decimal("0.11")
INVOICE_PREFIX = "INV"
INVOICE_SUFFIX_LENGTH = 6
INVOICE_MAX_ATTEMPTS = 3

DEFAULT_ATTENDANCE_LOCATION = "Office - Jakarta Headquarters"
DEFAULT_DAILY_SALES_TARGET = Decimal("20000000")

# Column limits: DECIMAL(15,2) money, signed INT ids and quantities.
MAX_AMOUNT = Decimal("9999999999999.99")
MAX_INT = 2147483647
