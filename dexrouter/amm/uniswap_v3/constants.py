"""UniswapV3 constants including fee tiers and the fee-combination tables."""

from enum import IntEnum


class FeeAmount(IntEnum):
    """Pool fee tiers in hundredths of a basis point (3000 = 0.3%)."""

    LOWEST = 100  # 0.01% - stable pairs
    LOW = 500  # 0.05% - stable pairs
    MEDIUM = 3000  # 0.30% - most pairs
    HIGH = 10000  # 1.00% - exotic pairs


V3_FEE_TIERS = [FeeAmount.LOWEST, FeeAmount.LOW, FeeAmount.MEDIUM, FeeAmount.HIGH]

# Tick spacing per fee tier
V3_TICK_SPACING = {
    FeeAmount.LOWEST: 1,
    FeeAmount.LOW: 10,
    FeeAmount.MEDIUM: 60,
    FeeAmount.HIGH: 200,
}

# Fee assignments tried for each one-intermediary path
TWO_HOP_FEE_COMBINATIONS: list[tuple[FeeAmount, FeeAmount]] = [
    (FeeAmount.LOWEST, FeeAmount.LOWEST),
    (FeeAmount.LOWEST, FeeAmount.LOW),
    (FeeAmount.LOWEST, FeeAmount.MEDIUM),
    (FeeAmount.LOW, FeeAmount.LOWEST),
    (FeeAmount.LOW, FeeAmount.LOW),
    (FeeAmount.LOW, FeeAmount.MEDIUM),
    (FeeAmount.MEDIUM, FeeAmount.LOWEST),
    (FeeAmount.MEDIUM, FeeAmount.LOW),
    (FeeAmount.MEDIUM, FeeAmount.MEDIUM),
]

# Fee assignments tried for each two-intermediary path
THREE_HOP_FEE_COMBINATIONS: list[tuple[FeeAmount, FeeAmount, FeeAmount]] = [
    (FeeAmount.LOWEST, FeeAmount.LOWEST, FeeAmount.LOWEST),
    (FeeAmount.LOWEST, FeeAmount.LOWEST, FeeAmount.LOW),
    (FeeAmount.LOWEST, FeeAmount.LOW, FeeAmount.LOWEST),
    (FeeAmount.LOWEST, FeeAmount.LOW, FeeAmount.LOW),
    (FeeAmount.LOW, FeeAmount.LOWEST, FeeAmount.LOWEST),
    (FeeAmount.LOW, FeeAmount.LOWEST, FeeAmount.LOW),
    (FeeAmount.LOW, FeeAmount.LOW, FeeAmount.LOWEST),
    (FeeAmount.LOW, FeeAmount.LOW, FeeAmount.LOW),
    (FeeAmount.MEDIUM, FeeAmount.MEDIUM, FeeAmount.MEDIUM),
]


def fee_combinations_for_hops(hops: int) -> list[tuple[FeeAmount, ...]]:
    """Return the fee assignments to try for a path with the given hop count.

    Raises:
        ValueError: For hop counts without a table
    """
    if hops == 1:
        return [(fee,) for fee in V3_FEE_TIERS]
    if hops == 2:
        return list(TWO_HOP_FEE_COMBINATIONS)
    if hops == 3:
        return list(THREE_HOP_FEE_COMBINATIONS)
    raise ValueError(f"No fee combinations for {hops} hops")


def tick_spacing_for_fee(fee: int) -> int:
    """Derive the standard tick spacing for a fee tier.

    Raises:
        ValueError: If fee is not a standard tier
    """
    try:
        return V3_TICK_SPACING[FeeAmount(fee)]
    except ValueError as err:
        raise ValueError(f"Invalid fee amount: {fee}") from err


__all__ = [
    "FeeAmount",
    "THREE_HOP_FEE_COMBINATIONS",
    "TWO_HOP_FEE_COMBINATIONS",
    "V3_FEE_TIERS",
    "V3_TICK_SPACING",
    "fee_combinations_for_hops",
    "tick_spacing_for_fee",
]
