"""
Settlement Request — граница контрактов

Преобразование между JSON-совместимыми dict и моделями:
- parse_settlement_request: dict -> SettlementRequest
  (сначала JSON Schema, затем Pydantic)
- balance_changes_to_contract: list[Balance] -> dict (проверяется по схеме)
"""

from typing import Any, Dict, Iterable

from src.core.contracts import validate_balance_changes, validate_settlement_request
from src.core.domain.balance import Balance
from src.core.domain.multisend import SettlementRequest


def parse_settlement_request(data: Dict[str, Any]) -> SettlementRequest:
    """
    Разбор запроса settlement.

    Args:
        data: dict по схеме settlement_request.json

    Returns:
        SettlementRequest

    Raises:
        jsonschema.ValidationError: структура не соответствует контракту
        pydantic.ValidationError: нарушены инварианты моделей (например, повтор denom)
    """
    validate_settlement_request(data)
    return SettlementRequest.model_validate(data)


def balance_changes_to_contract(changes: Iterable[Balance]) -> Dict[str, Any]:
    """
    Сериализация изменений балансов в контракт balance_changes.json.

    Raises:
        jsonschema.ValidationError: если результат не соответствует контракту
    """
    payload = {"balance_changes": [balance.model_dump() for balance in changes]}
    validate_balance_changes(payload)
    return payload
