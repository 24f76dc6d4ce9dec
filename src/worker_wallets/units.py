"""
ADA / lovelace conversion
"""

from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Union

LOVELACE_PER_ADA = 1_000_000

Amount = Union[Decimal, int, float, str]


def ada_to_lovelace(ada: Amount) -> int:
    """
    Convert ADA to lovelace

    Rounds to the nearest lovelace, ties to even. Floats go through ``str``
    first so ``0.01`` becomes exactly 10_000 lovelace.

    Raises:
        ValueError: If the amount is not a number or does not convert to a
            positive number of lovelace
    """
    try:
        value = Decimal(str(ada))
        if not value.is_finite():
            raise ValueError(f"Invalid ADA amount: {ada!r}")
        # Amounts beyond the context precision cannot be quantized
        lovelace = int((value * LOVELACE_PER_ADA).quantize(Decimal(1), rounding=ROUND_HALF_EVEN))
    except InvalidOperation as e:
        raise ValueError(f"Invalid ADA amount: {ada!r}") from e

    if lovelace <= 0:
        raise ValueError(f"Amount must be at least 1 lovelace, got {ada} ADA")
    return lovelace


def lovelace_to_ada(lovelace: int) -> Decimal:
    """
    Convert lovelace to ADA
    """
    return Decimal(lovelace) / LOVELACE_PER_ADA
