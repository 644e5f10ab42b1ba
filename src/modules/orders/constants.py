"""Order domain constants."""

from decimal import Decimal

# Flat tax applied to every order line.
TAX_RATE = Decimal("0.15")

# Monetary amounts are stored with two decimal places.
MONEY_QUANTUM = Decimal("0.01")

# Largest value a Decimal(18, 2) column can hold.
MAX_AMOUNT = Decimal("9999999999999999.99")
