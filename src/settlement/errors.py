"""
Settlement Rejections — Ошибки отклонения транзакции

Все ошибки rejection-класса: транзакция отклоняется целиком, изменения
балансов не применяются. Повтор без исправления данных бессмыслен.

Иерархия:
    SettlementRejected
    ├── ConservationMismatch   (CONSERVATION_MISMATCH)
    ├── UnknownDenomination    (UNKNOWN_DENOMINATION)
    ├── MissingBalance         (MISSING_BALANCE)
    ├── InsufficientBalance    (INSUFFICIENT_BALANCE)
    └── AmountOverflow         (AMOUNT_OVERFLOW)
"""

from typing import Any


class SettlementRejected(Exception):
    """Базовая ошибка отклонения транзакции."""

    error_kind: str = "REJECTED"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        return self.message


class ConservationMismatch(SettlementRejected):
    """Сумма inputs не совпадает с суммой outputs по denom."""

    error_kind = "CONSERVATION_MISMATCH"

    def __init__(self, denom: str, input_total: int, output_total: int):
        super().__init__(
            f"input and output totals do not match for {denom}: "
            f"inputs={input_total}, outputs={output_total}",
            {"denom": denom, "input_total": input_total, "output_total": output_total},
        )
        self.denom = denom


class UnknownDenomination(SettlementRejected):
    """Denom из транзакции отсутствует в определениях."""

    error_kind = "UNKNOWN_DENOMINATION"

    def __init__(self, denom: str):
        super().__init__(f"no definition for denom {denom}", {"denom": denom})
        self.denom = denom


class MissingBalance(SettlementRejected):
    """Для адреса-отправителя нет записи баланса."""

    error_kind = "MISSING_BALANCE"

    def __init__(self, address: str):
        super().__init__(f"no balance record for {address}", {"address": address})
        self.address = address


class InsufficientBalance(SettlementRejected):
    """Баланса не хватает на сумму перевода + burn + commission."""

    error_kind = "INSUFFICIENT_BALANCE"

    def __init__(self, address: str, denom: str, required: int, available: int):
        super().__init__(
            f"{address} does not have enough balance for {denom}: "
            f"required {required}, available {available}",
            {"address": address, "denom": denom, "required": required, "available": available},
        )
        self.address = address
        self.denom = denom


class AmountOverflow(SettlementRejected):
    """Итоговое изменение баланса не укладывается в знаковые 128 бит."""

    error_kind = "AMOUNT_OVERFLOW"

    def __init__(self, address: str, denom: str, amount: int):
        super().__init__(
            f"balance change for {address} in {denom} is outside the signed 128-bit range: {amount}",
            {"address": address, "denom": denom, "amount": amount},
        )
        self.address = address
        self.denom = denom
