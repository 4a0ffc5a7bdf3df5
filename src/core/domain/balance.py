"""
Coin / Balance — Модели количества и балансов

Immutable Pydantic модели для количеств монет (Coin) и наборов монет
конкретного адреса (Balance).

Balance используется в двух контекстах:
- текущий баланс счёта (снапшот до транзакции)
- движение по счёту (inputs/outputs транзакции, итоговые изменения)

Порядок элементов в Balance.coins и в списках Balance семантически не важен,
поэтому для сравнения используются normalize_balances / balances_equal.
"""

from typing import Final, Iterable

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# CONSTANTS
# =============================================================================

# Диапазон знакового 128-битного целого (amount хранится как i128)
AMOUNT_MIN: Final[int] = -(2**127)
AMOUNT_MAX: Final[int] = 2**127 - 1


# =============================================================================
# MODELS
# =============================================================================


class Coin(BaseModel):
    """Количество конкретного denom."""

    denom: str = Field(..., min_length=1, description="Идентификатор denom (например, 'usdt')")
    amount: int = Field(..., description="Количество (знаковое, 128 бит)")

    model_config = {"frozen": True}

    @field_validator("amount")
    @classmethod
    def validate_i128_range(cls, v: int) -> int:
        if v < AMOUNT_MIN or v > AMOUNT_MAX:
            raise ValueError(f"amount {v} outside signed 128-bit range")
        return v


class Balance(BaseModel):
    """
    Набор монет одного адреса.

    Инвариант: denom уникален внутри coins.
    """

    address: str = Field(..., min_length=1, description="Адрес счёта")
    coins: list[Coin] = Field(default_factory=list, description="Монеты (denom уникален)")

    model_config = {"frozen": True}

    @field_validator("coins")
    @classmethod
    def validate_unique_denoms(cls, v: list[Coin]) -> list[Coin]:
        seen: set[str] = set()
        for coin in v:
            if coin.denom in seen:
                raise ValueError(f"duplicate denom '{coin.denom}' in balance coins")
            seen.add(coin.denom)
        return v

    def amount_of(self, denom: str) -> int | None:
        """
        Количество denom в балансе.

        Returns:
            amount или None, если записи для denom нет
        """
        for coin in self.coins:
            if coin.denom == denom:
                return coin.amount
        return None

    def denoms(self) -> list[str]:
        return [coin.denom for coin in self.coins]


# =============================================================================
# COMPARISON HELPERS
# =============================================================================


def normalize_balances(balances: Iterable[Balance]) -> list[tuple[str, tuple[tuple[str, int], ...]]]:
    """
    Каноническое представление списка балансов.

    Адреса и denom сортируются, поэтому два списка с одинаковым содержимым,
    но разным порядком, дают одинаковый результат.

    Examples:
        >>> normalize_balances([Balance(address="b", coins=[Coin(denom="x", amount=1)])])
        [('b', (('x', 1),))]
    """
    return sorted(
        (
            balance.address,
            tuple(sorted((coin.denom, coin.amount) for coin in balance.coins)),
        )
        for balance in balances
    )


def balances_equal(expected: Iterable[Balance], actual: Iterable[Balance]) -> bool:
    """Сравнение двух списков балансов без учёта порядка адресов и монет."""
    return normalize_balances(expected) == normalize_balances(actual)
