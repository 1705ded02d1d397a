"""Constant-product (x * y = k) swap simulation."""

import math

from dexdash.exceptions import InvalidInputError
from dexdash.models import SwapQuote

BPS_DENOMINATOR = 10_000


def simulate_swap(
    reserve_x: float,
    reserve_y: float,
    amount_in: float,
    fee_bps: float,
) -> SwapQuote:
    """Simulate selling ``amount_in`` of X into an X/Y constant-product pool.

    The fee is taken from the input before it reaches the pool:
    ``after_fee = amount_in * (1 - fee_bps / 10000)``, ``k = Rx * Ry``,
    ``new_Rx = Rx + after_fee``, ``new_Ry = k / new_Rx`` and
    ``amount_out = Ry - new_Ry``. Price impact is ``amount_out / Ry * 100``.

    Raises:
        InvalidInputError: On non-finite values, non-positive reserves or
            amount, a fee outside [0, 10000) bps, or reserves so large that
            the quote overflows.
    """
    values = (reserve_x, reserve_y, amount_in, fee_bps)
    if not all(math.isfinite(v) for v in values):
        raise InvalidInputError("Bad input")
    if reserve_x <= 0 or reserve_y <= 0 or amount_in <= 0:
        raise InvalidInputError("Values must be > 0")
    if fee_bps < 0 or fee_bps >= BPS_DENOMINATOR:
        raise InvalidInputError("feeBps must be between 0 and 10000")

    amount_in_after_fee = amount_in * (1 - fee_bps / BPS_DENOMINATOR)
    k = reserve_x * reserve_y
    new_x = reserve_x + amount_in_after_fee
    new_y = k / new_x
    amount_out = reserve_y - new_y
    price_impact_pct = amount_out / reserve_y * 100

    # Huge reserves can overflow k even when every input is finite
    if not all(math.isfinite(v) for v in (k, new_x, new_y, amount_out, price_impact_pct)):
        raise InvalidInputError("Bad input")

    return SwapQuote(
        amount_out=amount_out,
        new_reserve_x=new_x,
        new_reserve_y=new_y,
        price_impact_pct=price_impact_pct,
    )
