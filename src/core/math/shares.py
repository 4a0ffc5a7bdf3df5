"""
Proportional Shares — Пропорциональное распределение burn/commission

Модуль вычисляет долю сбора (burn или commission), приходящуюся на один
input non-issuer отправителя:

    share = ceil(base * rate * amount / non_issuer_input_sum - eps)

где base = min(non_issuer_input_sum, non_issuer_output_sum).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Округление всегда вверх (сбор никогда не недобирается)
2. Каждый отправитель округляется независимо (без largest-remainder)
3. Промежуточная арифметика — IEEE-754 double, порядок операндов фиксирован:
   ((base * rate) * amount) / non_issuer_input_sum
4. share >= 0 для валидных входов

EPSILON:
    Для commission вычитается COMMISSION_SHARE_EPS перед ceil, чтобы точное
    кратное, представленное во float чуть выше целого (например 77.00000000000001),
    не округлялось до следующего целого. Для burn eps = 0.0.
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Поправка перед ceil для burn (нет поправки)
BURN_SHARE_EPS: Final[float] = 0.0

# Поправка перед ceil для commission
COMMISSION_SHARE_EPS: Final[float] = 1e-10


# =============================================================================
# VALIDATION
# =============================================================================


def is_valid_float(value: float) -> bool:
    """Проверка, что float не NaN и не Inf."""
    return not (math.isnan(value) or math.isinf(value))


def validate_rate(rate: float, name: str) -> None:
    """
    Валидация ставки (фракция в [0, 1]).

    Raises:
        ValueError: если ставка NaN/Inf или вне [0, 1]
    """
    if not is_valid_float(rate):
        raise ValueError(f"{name} contains NaN/Inf: {rate}")
    if rate < 0.0 or rate > 1.0:
        raise ValueError(f"{name} must be in [0, 1], got {rate}")


# =============================================================================
# SHARES
# =============================================================================


def proportional_share(
    base: int,
    rate: float,
    amount: int,
    non_issuer_input_sum: int,
    eps: float = BURN_SHARE_EPS,
) -> int:
    """
    Доля сбора для одного input.

    Args:
        base: Облагаемый объём denom: min(non_issuer_input_sum, non_issuer_output_sum)
        rate: Ставка burn или commission (0-1)
        amount: Сумма input отправителя
        non_issuer_input_sum: Сумма всех non-issuer inputs по denom
        eps: Поправка перед ceil (BURN_SHARE_EPS / COMMISSION_SHARE_EPS)

    Returns:
        Целая доля (>= 0), округлённая вверх

    Raises:
        ValueError: если non_issuer_input_sum <= 0 или ставка невалидна

    Examples:
        >>> proportional_share(1000, 0.08, 1000, 1000)
        80
        >>> proportional_share(150, 0.1, 60, 150)
        6
        >>> proportional_share(2600, 0.07, 1100, 2600, eps=COMMISSION_SHARE_EPS)
        77
    """
    if non_issuer_input_sum <= 0:
        raise ValueError(
            f"non_issuer_input_sum must be positive, got {non_issuer_input_sum}"
        )
    validate_rate(rate, "rate")

    raw = float(base) * rate * float(amount) / float(non_issuer_input_sum)
    return math.ceil(raw - eps)
