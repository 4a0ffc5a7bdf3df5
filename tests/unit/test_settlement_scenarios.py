"""
Табличные сценарии settlement

Сценарии из tests/fixtures/settlement_cases.json прогоняются через
границу контрактов (JSON Schema -> Pydantic -> калькулятор -> JSON Schema).

Проверяется:
- изменения балансов совпадают с ожидаемыми без учёта порядка
- тип отклонения совпадает с ожидаемым
- принятые результаты соответствуют контракту balance_changes.json
"""

import json
from pathlib import Path

import pytest

from src.core.domain import Balance, balances_equal
from src.settlement import (
    SettlementCalculator,
    SettlementRejected,
    balance_changes_to_contract,
    calculate_balance_changes,
    parse_settlement_request,
)

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures" / "settlement_cases.json"


def _load_cases():
    with open(FIXTURES_PATH, "r", encoding="utf-8") as f:
        return json.load(f)["cases"]


CASES = _load_cases()


@pytest.mark.parametrize("case", CASES, ids=[case["name"] for case in CASES])
def test_settlement_case(case):
    """Сценарий даёт ожидаемые изменения или ожидаемое отклонение."""
    request = parse_settlement_request(case["request"])
    expected = case["expected"]

    result = SettlementCalculator().evaluate_request(request)

    if "error_kind" in expected:
        assert result.accepted is False
        assert result.error_kind == expected["error_kind"]
        assert result.balance_changes == ()

        with pytest.raises(SettlementRejected) as exc_info:
            calculate_balance_changes(request.balances, request.definitions, request.transaction)
        assert exc_info.value.error_kind == expected["error_kind"]
    else:
        assert result.accepted is True
        expected_changes = [Balance.model_validate(b) for b in expected["balance_changes"]]
        assert balances_equal(expected_changes, result.balance_changes)

        # Результат проходит контракт ответа
        balance_changes_to_contract(result.balance_changes)


def test_case_names_unique():
    names = [case["name"] for case in CASES]
    assert len(names) == len(set(names))
