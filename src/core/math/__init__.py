"""
Core math modules

Математические примитивы для расчёта сборов с гарантией детерминизма.
"""

from src.core.math.shares import (
    BURN_SHARE_EPS,
    COMMISSION_SHARE_EPS,
    is_valid_float,
    proportional_share,
    validate_rate,
)

__all__ = [
    # Epsilon constants
    "BURN_SHARE_EPS",
    "COMMISSION_SHARE_EPS",
    # Validation
    "is_valid_float",
    "validate_rate",
    # Shares
    "proportional_share",
]
