"""
Tests for Domain Models

Покрывает:
- Coin: границы i128, immutability
- Balance: уникальность denom, amount_of
- DenomDefinition: диапазон ставок, NaN/Inf
- MultiSend: неотрицательные суммы, referenced_denoms
- SettlementRequest: сборка из dict
- normalize_balances / balances_equal: сравнение без учёта порядка
"""

import pytest
from pydantic import ValidationError

from src.core.domain import (
    AMOUNT_MAX,
    AMOUNT_MIN,
    Balance,
    Coin,
    DenomDefinition,
    MultiSend,
    SettlementRequest,
    balances_equal,
    normalize_balances,
)


# =============================================================================
# ТЕСТЫ: Coin
# =============================================================================


class TestCoin:
    """Тесты модели Coin."""

    def test_create(self):
        coin = Coin(denom="usdt", amount=100)
        assert coin.denom == "usdt"
        assert coin.amount == 100

    def test_negative_amount_allowed(self):
        assert Coin(denom="usdt", amount=-100).amount == -100

    def test_i128_bounds(self):
        assert Coin(denom="usdt", amount=AMOUNT_MAX).amount == 2**127 - 1
        assert Coin(denom="usdt", amount=AMOUNT_MIN).amount == -(2**127)

        with pytest.raises(ValidationError):
            Coin(denom="usdt", amount=AMOUNT_MAX + 1)
        with pytest.raises(ValidationError):
            Coin(denom="usdt", amount=AMOUNT_MIN - 1)

    def test_empty_denom_rejected(self):
        with pytest.raises(ValidationError):
            Coin(denom="", amount=1)

    def test_frozen(self):
        coin = Coin(denom="usdt", amount=100)
        with pytest.raises(ValidationError):
            coin.amount = 200


# =============================================================================
# ТЕСТЫ: Balance
# =============================================================================


class TestBalance:
    """Тесты модели Balance."""

    def test_amount_of(self):
        balance = Balance(
            address="a",
            coins=[Coin(denom="x", amount=5), Coin(denom="y", amount=0)],
        )
        assert balance.amount_of("x") == 5
        assert balance.amount_of("y") == 0
        assert balance.amount_of("z") is None

    def test_denoms(self):
        balance = Balance(
            address="a",
            coins=[Coin(denom="y", amount=1), Coin(denom="x", amount=2)],
        )
        assert balance.denoms() == ["y", "x"]

    def test_empty_coins_default(self):
        assert Balance(address="a").coins == []

    def test_duplicate_denom_rejected(self):
        with pytest.raises(ValidationError, match="duplicate denom"):
            Balance(
                address="a",
                coins=[Coin(denom="x", amount=1), Coin(denom="x", amount=2)],
            )

    def test_from_dict(self):
        balance = Balance.model_validate(
            {"address": "a", "coins": [{"denom": "x", "amount": 7}]}
        )
        assert balance.coins[0] == Coin(denom="x", amount=7)


# =============================================================================
# ТЕСТЫ: DenomDefinition
# =============================================================================


class TestDenomDefinition:
    """Тесты модели DenomDefinition."""

    def test_create(self):
        definition = DenomDefinition(
            denom="core", issuer="issuer_A", burn_rate=0.08, commission_rate=0.12
        )
        assert definition.is_issuer("issuer_A") is True
        assert definition.is_issuer("account1") is False

    @pytest.mark.parametrize("rate", [0.0, 1.0])
    def test_rate_bounds_inclusive(self, rate):
        DenomDefinition(denom="core", issuer="i", burn_rate=rate, commission_rate=rate)

    @pytest.mark.parametrize("rate", [-0.01, 1.01, 210000.0])
    def test_burn_rate_out_of_range(self, rate):
        with pytest.raises(ValidationError):
            DenomDefinition(denom="core", issuer="i", burn_rate=rate, commission_rate=0.0)

    @pytest.mark.parametrize("rate", [-0.01, 1.01])
    def test_commission_rate_out_of_range(self, rate):
        with pytest.raises(ValidationError):
            DenomDefinition(denom="core", issuer="i", burn_rate=0.0, commission_rate=rate)

    def test_nan_rejected(self):
        with pytest.raises(ValidationError):
            DenomDefinition(
                denom="core", issuer="i", burn_rate=float("nan"), commission_rate=0.0
            )


# =============================================================================
# ТЕСТЫ: MultiSend / SettlementRequest
# =============================================================================


class TestMultiSend:
    """Тесты модели MultiSend."""

    def test_empty_defaults(self):
        tx = MultiSend()
        assert tx.inputs == []
        assert tx.outputs == []
        assert tx.referenced_denoms() == []

    def test_zero_amounts_allowed(self):
        MultiSend(
            inputs=[Balance(address="a", coins=[Coin(denom="x", amount=0)])],
            outputs=[Balance(address="b", coins=[Coin(denom="x", amount=0)])],
        )

    def test_negative_input_rejected(self):
        with pytest.raises(ValidationError, match="negative transfer amount"):
            MultiSend(inputs=[Balance(address="a", coins=[Coin(denom="x", amount=-1)])])

    def test_negative_output_rejected(self):
        with pytest.raises(ValidationError, match="negative transfer amount"):
            MultiSend(outputs=[Balance(address="b", coins=[Coin(denom="x", amount=-1)])])

    def test_referenced_denoms_order(self):
        tx = MultiSend(
            inputs=[
                Balance(
                    address="a",
                    coins=[Coin(denom="y", amount=1), Coin(denom="x", amount=1)],
                )
            ],
            outputs=[
                Balance(
                    address="b",
                    coins=[Coin(denom="x", amount=1), Coin(denom="z", amount=1)],
                )
            ],
        )
        assert tx.referenced_denoms() == ["y", "x", "z"]


class TestSettlementRequest:
    """Тесты модели SettlementRequest."""

    def test_from_dict(self):
        request = SettlementRequest.model_validate(
            {
                "balances": [{"address": "a", "coins": [{"denom": "x", "amount": 10}]}],
                "definitions": [
                    {"denom": "x", "issuer": "i", "burn_rate": 0.1, "commission_rate": 0.0}
                ],
                "transaction": {
                    "inputs": [{"address": "a", "coins": [{"denom": "x", "amount": 5}]}],
                    "outputs": [{"address": "b", "coins": [{"denom": "x", "amount": 5}]}],
                },
            }
        )
        assert request.balances[0].amount_of("x") == 10
        assert request.definitions[0].burn_rate == 0.1
        assert request.transaction.referenced_denoms() == ["x"]

    def test_missing_transaction_rejected(self):
        with pytest.raises(ValidationError):
            SettlementRequest.model_validate({"balances": [], "definitions": []})


# =============================================================================
# ТЕСТЫ: Сравнение балансов
# =============================================================================


class TestBalanceComparison:
    """Тесты normalize_balances / balances_equal."""

    def test_order_insensitive(self):
        first = [
            Balance(address="b", coins=[Coin(denom="y", amount=2), Coin(denom="x", amount=1)]),
            Balance(address="a", coins=[Coin(denom="x", amount=-3)]),
        ]
        second = [
            Balance(address="a", coins=[Coin(denom="x", amount=-3)]),
            Balance(address="b", coins=[Coin(denom="x", amount=1), Coin(denom="y", amount=2)]),
        ]
        assert balances_equal(first, second) is True

    def test_amount_difference_detected(self):
        first = [Balance(address="a", coins=[Coin(denom="x", amount=1)])]
        second = [Balance(address="a", coins=[Coin(denom="x", amount=2)])]
        assert balances_equal(first, second) is False

    def test_length_difference_detected(self):
        first = [Balance(address="a", coins=[Coin(denom="x", amount=1)])]
        assert balances_equal(first, []) is False

    def test_normalize(self):
        balances = [
            Balance(address="b", coins=[Coin(denom="y", amount=2), Coin(denom="x", amount=1)]),
            Balance(address="a"),
        ]
        assert normalize_balances(balances) == [
            ("a", ()),
            ("b", (("x", 1), ("y", 2))),
        ]
