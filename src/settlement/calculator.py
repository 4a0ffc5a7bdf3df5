"""
Settlement Calculator — расчёт изменений балансов для MultiSend

Вход:
- снапшот балансов до транзакции
- определения denom (issuer, burn_rate, commission_rate)
- транзакция MultiSend (inputs/outputs)

Выход:
- список изменений балансов (отрицательные — списание, положительные — зачисление)
- или отклонение (SettlementRejected), без частичных результатов

Порядок стадий:
1. Conservation: сумма inputs == сумма outputs по каждому denom
2. Определения: каждый denom из транзакции должен иметь DenomDefinition
3. Non-issuer агрегация: non_issuer_input_sum / non_issuer_output_sum по denom
4. Облагаемый объём: base = min(non_issuer_input_sum, non_issuer_output_sum)
5. Доли burn и commission для каждого non-issuer input (ceil, независимо)
5a. Достаточность баланса сразу после каждой монеты input:
   balance >= накопленное amount + burn + commission; нет записи denom -> отказ
6. Сборка изменений: inputs (-), outputs (+), commission -> issuer (+), burn никуда
7. Диапазон: каждое итоговое изменение укладывается в i128

Нулевые изменения и адреса без изменений в результат не попадают.
Расчёт без побочных эффектов: все агрегаты локальны для одного вызова.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from src.core.domain.balance import AMOUNT_MAX, AMOUNT_MIN, Balance, Coin
from src.core.domain.denom import DenomDefinition
from src.core.domain.multisend import MultiSend, SettlementRequest
from src.core.math.shares import BURN_SHARE_EPS, COMMISSION_SHARE_EPS, proportional_share
from src.settlement.errors import (
    AmountOverflow,
    ConservationMismatch,
    InsufficientBalance,
    MissingBalance,
    SettlementRejected,
    UnknownDenomination,
)

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class SettlementConfig:
    """Конфигурация расчёта.

    Поправки перед ceil для долей сборов. Асимметрия (eps только для commission)
    сохраняет побитовую совместимость результатов на граничных случаях.
    """

    burn_share_eps: float = BURN_SHARE_EPS
    commission_share_eps: float = COMMISSION_SHARE_EPS


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class SettlementResult:
    """Результат расчёта."""

    accepted: bool
    error_kind: str
    reject_reason: str

    # Изменения балансов (пусто при отклонении)
    balance_changes: tuple[Balance, ...] = ()

    # Итоги сборов по denom
    burned: dict[str, int] = field(default_factory=dict)
    commissions: dict[str, int] = field(default_factory=dict)

    # Детали отклонения
    details: dict[str, Any] = field(default_factory=dict)


# =============================================================================
# STAGES
# =============================================================================


def sum_by_denom(
    balances: Iterable[Balance], issuers: dict[str, str] | None = None
) -> dict[str, int]:
    """
    Сумма amount по denom.

    Args:
        balances: inputs или outputs транзакции
        issuers: denom -> issuer; если передан, монеты issuer'а своего denom пропускаются

    Returns:
        denom -> сумма (в порядке первого появления denom)
    """
    totals: dict[str, int] = {}
    for balance in balances:
        for coin in balance.coins:
            if issuers is not None and issuers[coin.denom] == balance.address:
                continue
            totals[coin.denom] = totals.get(coin.denom, 0) + coin.amount
    return totals


def check_conservation(transaction: MultiSend) -> None:
    """
    Проверка сохранения: сумма inputs == сумма outputs по каждому denom.

    Denom, присутствующий только с одной стороны, считается нулём на другой.

    Raises:
        ConservationMismatch: для первого denom с расхождением
    """
    input_totals = sum_by_denom(transaction.inputs)
    output_totals = sum_by_denom(transaction.outputs)

    for denom in {**input_totals, **output_totals}:
        input_total = input_totals.get(denom, 0)
        output_total = output_totals.get(denom, 0)
        if input_total != output_total:
            raise ConservationMismatch(denom, input_total, output_total)


def index_definitions(
    definitions: Iterable[DenomDefinition], denoms: Iterable[str]
) -> dict[str, DenomDefinition]:
    """
    Индекс определений по denom.

    При повторе denom в definitions используется первое определение.

    Raises:
        UnknownDenomination: если для denom из транзакции нет определения
    """
    index: dict[str, DenomDefinition] = {}
    for definition in definitions:
        index.setdefault(definition.denom, definition)

    for denom in denoms:
        if denom not in index:
            raise UnknownDenomination(denom)
    return index


def _accumulate(changes: dict[str, dict[str, int]], address: str, denom: str, amount: int) -> None:
    coins = changes.setdefault(address, {})
    coins[denom] = coins.get(denom, 0) + amount


def settle(
    balances: Sequence[Balance],
    definitions: Sequence[DenomDefinition],
    transaction: MultiSend,
    config: SettlementConfig | None = None,
) -> SettlementResult:
    """
    Полный расчёт MultiSend.

    Args:
        balances: балансы до транзакции (по одному на адрес; при повторе берётся первый)
        definitions: определения всех denom из транзакции
        transaction: транзакция MultiSend
        config: конфигурация (опционально)

    Returns:
        SettlementResult с accepted=True, изменениями и итогами сборов

    Raises:
        ConservationMismatch, UnknownDenomination, MissingBalance, InsufficientBalance,
        AmountOverflow
    """
    config = config or SettlementConfig()

    # 1. Conservation
    check_conservation(transaction)

    # 2. Определения
    index = index_definitions(definitions, transaction.referenced_denoms())
    issuers = {denom: definition.issuer for denom, definition in index.items()}

    # 3-4. Non-issuer агрегация
    non_issuer_inputs = sum_by_denom(transaction.inputs, issuers)
    non_issuer_outputs = sum_by_denom(transaction.outputs, issuers)

    holdings: dict[str, Balance] = {}
    for balance in balances:
        holdings.setdefault(balance.address, balance)

    # 5. Доли сборов; debits: (address, denom) -> amount + burn + commission
    debits: dict[tuple[str, str], int] = {}
    burned: dict[str, int] = {}
    commissions: dict[str, int] = {}

    for entry in transaction.inputs:
        if entry.address not in holdings:
            raise MissingBalance(entry.address)

        for coin in entry.coins:
            definition = index[coin.denom]
            total = coin.amount

            input_sum = non_issuer_inputs.get(coin.denom, 0)
            if not definition.is_issuer(entry.address) and input_sum > 0:
                base = min(input_sum, non_issuer_outputs.get(coin.denom, 0))
                burn = proportional_share(
                    base, definition.burn_rate, coin.amount, input_sum, config.burn_share_eps
                )
                commission = proportional_share(
                    base,
                    definition.commission_rate,
                    coin.amount,
                    input_sum,
                    config.commission_share_eps,
                )
                logger.debug(
                    "settlement_share_computed",
                    extra={
                        "address": entry.address,
                        "denom": coin.denom,
                        "amount": coin.amount,
                        "burn_share": burn,
                        "commission_share": commission,
                    },
                )
                burned[coin.denom] = burned.get(coin.denom, 0) + burn
                commissions[coin.denom] = commissions.get(coin.denom, 0) + commission
                total += burn + commission

            key = (entry.address, coin.denom)
            debits[key] = debits.get(key, 0) + total

            # 5a. Достаточность баланса по накопленному списанию (нет записи denom -> отказ)
            available = holdings[entry.address].amount_of(coin.denom)
            if available is None:
                raise InsufficientBalance(entry.address, coin.denom, debits[key], 0)
            if available < debits[key]:
                raise InsufficientBalance(entry.address, coin.denom, debits[key], available)

    # 6. Сборка изменений
    changes: dict[str, dict[str, int]] = {}
    for (address, denom), required in debits.items():
        _accumulate(changes, address, denom, -required)
    for entry in transaction.outputs:
        for coin in entry.coins:
            _accumulate(changes, entry.address, coin.denom, coin.amount)
    for denom, commission in commissions.items():
        _accumulate(changes, issuers[denom], denom, commission)

    balance_changes = []
    for address, coins in changes.items():
        # 7. Диапазон i128
        for denom, amount in coins.items():
            if amount < AMOUNT_MIN or amount > AMOUNT_MAX:
                raise AmountOverflow(address, denom, amount)
        nonzero = [Coin(denom=denom, amount=amount) for denom, amount in coins.items() if amount != 0]
        if nonzero:
            balance_changes.append(Balance(address=address, coins=nonzero))

    return SettlementResult(
        accepted=True,
        error_kind="",
        reject_reason="",
        balance_changes=tuple(balance_changes),
        burned=burned,
        commissions=commissions,
    )


def calculate_balance_changes(
    balances: Sequence[Balance],
    definitions: Sequence[DenomDefinition],
    transaction: MultiSend,
    config: SettlementConfig | None = None,
) -> list[Balance]:
    """
    Изменения балансов, которые нужно атомарно применить к счетам.

    Returns:
        список Balance с ненулевыми изменениями (отрицательные — списание)

    Raises:
        SettlementRejected: транзакция должна быть отклонена
    """
    return list(settle(balances, definitions, transaction, config).balance_changes)


# =============================================================================
# CALCULATOR
# =============================================================================


class SettlementCalculator:
    """Калькулятор settlement для MultiSend.

    В отличие от calculate_balance_changes не бросает исключения при отклонении:
    возвращает SettlementResult(accepted=False, ...) с типом и причиной.
    """

    def __init__(self, config: SettlementConfig | None = None):
        """Инициализация калькулятора.

        Args:
            config: конфигурация расчёта (опционально, используется default)
        """
        self.config = config or SettlementConfig()

    def evaluate(
        self,
        balances: Sequence[Balance],
        definitions: Sequence[DenomDefinition],
        transaction: MultiSend,
    ) -> SettlementResult:
        """Расчёт изменений балансов для транзакции.

        Returns:
            SettlementResult (accepted или rejected)
        """
        try:
            result = settle(balances, definitions, transaction, self.config)
        except SettlementRejected as exc:
            return self._rejected_result(exc)

        logger.info(
            "settlement_accepted",
            extra={
                "inputs": len(transaction.inputs),
                "outputs": len(transaction.outputs),
                "accounts_changed": len(result.balance_changes),
                "burned": result.burned,
                "commissions": result.commissions,
            },
        )
        return result

    def evaluate_request(self, request: SettlementRequest) -> SettlementResult:
        return self.evaluate(request.balances, request.definitions, request.transaction)

    def _rejected_result(self, exc: SettlementRejected) -> SettlementResult:
        logger.info(
            "settlement_rejected",
            extra={"error_kind": exc.error_kind, "reason": exc.message, **exc.details},
        )
        return SettlementResult(
            accepted=False,
            error_kind=exc.error_kind,
            reject_reason=exc.message,
            details=dict(exc.details),
        )
