"""Settlement — расчёт изменений балансов для транзакций MultiSend.

Единственная операция: по снапшоту балансов, определениям denom и транзакции
вычислить подписанные изменения балансов или отклонить транзакцию.
"""

from .calculator import (
    SettlementCalculator,
    SettlementConfig,
    SettlementResult,
    calculate_balance_changes,
    check_conservation,
    index_definitions,
    settle,
    sum_by_denom,
)
from .errors import (
    AmountOverflow,
    ConservationMismatch,
    InsufficientBalance,
    MissingBalance,
    SettlementRejected,
    UnknownDenomination,
)
from .request import balance_changes_to_contract, parse_settlement_request

__all__ = [
    # Calculator
    "SettlementCalculator",
    "SettlementConfig",
    "SettlementResult",
    "calculate_balance_changes",
    "settle",
    # Stages
    "check_conservation",
    "index_definitions",
    "sum_by_denom",
    # Errors
    "SettlementRejected",
    "ConservationMismatch",
    "UnknownDenomination",
    "MissingBalance",
    "InsufficientBalance",
    "AmountOverflow",
    # Contracts
    "parse_settlement_request",
    "balance_changes_to_contract",
]
