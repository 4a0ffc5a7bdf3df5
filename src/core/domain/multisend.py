"""
MultiSend — Модель транзакции множественного перевода

Транзакция переводит несколько denom с нескольких адресов (inputs)
на несколько адресов (outputs). Сумма inputs и outputs должна совпадать
по каждому denom (проверяется калькулятором, не моделью).

SettlementRequest объединяет всё, что нужно калькулятору:
снапшот балансов, определения denom и саму транзакцию.
"""

from pydantic import BaseModel, Field, field_validator

from .balance import Balance
from .denom import DenomDefinition


class MultiSend(BaseModel):
    """
    Транзакция MultiSend.

    inputs: списания (какие монеты и сколько списать с каждого адреса)
    outputs: зачисления (какие монеты и сколько зачислить на каждый адрес)
    """

    inputs: list[Balance] = Field(default_factory=list, description="Списания по адресам")
    outputs: list[Balance] = Field(default_factory=list, description="Зачисления по адресам")

    model_config = {"frozen": True}

    @field_validator("inputs", "outputs")
    @classmethod
    def validate_non_negative_amounts(cls, v: list[Balance]) -> list[Balance]:
        """Суммы перевода не могут быть отрицательными (иначе доли burn/commission < 0)."""
        for balance in v:
            for coin in balance.coins:
                if coin.amount < 0:
                    raise ValueError(
                        f"negative transfer amount {coin.amount} for "
                        f"{balance.address}/{coin.denom}"
                    )
        return v

    def referenced_denoms(self) -> list[str]:
        """Все denom из inputs и outputs (в порядке первого появления)."""
        denoms: dict[str, None] = {}
        for balance in (*self.inputs, *self.outputs):
            for coin in balance.coins:
                denoms.setdefault(coin.denom, None)
        return list(denoms)


class SettlementRequest(BaseModel):
    """Запрос на расчёт изменений балансов."""

    balances: list[Balance] = Field(..., description="Балансы до транзакции")
    definitions: list[DenomDefinition] = Field(..., description="Определения denom")
    transaction: MultiSend = Field(..., description="Транзакция MultiSend")

    model_config = {"frozen": True}
