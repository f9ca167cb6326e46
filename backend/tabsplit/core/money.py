"""Money Codec — decimal major units <-> integer minor units (cents).

Invariants:
    - to_cents rounds half-up to the nearest cent (inputs are non-negative)
    - from_cents is exact: no rounding beyond the cent scale
    - from_cents(to_cents(x)) == x for any x already at cent precision
"""

from decimal import Decimal, ROUND_HALF_UP

from tabsplit.core.domain_types import Cents

_ONE = Decimal(1)
_HUNDRED = Decimal(100)


def to_cents(amount: Decimal | int | str) -> Cents:
    """Convert a major-unit amount to whole cents, rounding half-up."""
    scaled = Decimal(amount) * _HUNDRED
    return Cents(int(scaled.quantize(_ONE, rounding=ROUND_HALF_UP)))


def from_cents(cents: int) -> Decimal:
    """Convert cents back to an exact two-place Decimal amount."""
    return Decimal(cents).scaleb(-2)


def line_total_cents(quantity: Decimal, unit_price: Decimal) -> Cents:
    """Total for quantity × unit_price, in cents."""
    return to_cents(Decimal(quantity) * Decimal(unit_price))
