"""
Domain models and value objects.

Contains fundamental domain entities like Coin, Balance, DenomDefinition, MultiSend.
"""

from src.core.domain.balance import (
    AMOUNT_MAX,
    AMOUNT_MIN,
    Balance,
    Coin,
    balances_equal,
    normalize_balances,
)
from src.core.domain.denom import DenomDefinition
from src.core.domain.multisend import MultiSend, SettlementRequest

__all__ = [
    # Balance module
    "AMOUNT_MIN",
    "AMOUNT_MAX",
    "Coin",
    "Balance",
    "normalize_balances",
    "balances_equal",
    # Denom model
    "DenomDefinition",
    # Transaction models
    "MultiSend",
    "SettlementRequest",
]
