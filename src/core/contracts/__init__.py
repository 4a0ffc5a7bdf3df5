"""
Contract Validation Module

Модуль для валидации JSON контрактов settlement.
"""

from .validators import (
    DEFAULT_SCHEMA_DIR,
    BalanceChangesValidator,
    ContractValidator,
    SchemaLoader,
    get_schema_loader,
    SettlementRequestValidator,
    validate_balance_changes,
    validate_settlement_request,
)

__all__ = [
    "DEFAULT_SCHEMA_DIR",
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "SettlementRequestValidator",
    "BalanceChangesValidator",
    # Functions
    "get_schema_loader",
    "validate_settlement_request",
    "validate_balance_changes",
]
