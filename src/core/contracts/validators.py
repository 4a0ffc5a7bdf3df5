"""
JSON Schema Contract Validators

Модуль для валидации JSON данных settlement согласно формальным JSON Schema
контрактам. Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы:
- settlement_request.json (балансы, определения denom, транзакция MultiSend)
- balance_changes.json (принятый результат: ненулевые изменения балансов)
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator

# Схемы поставляются как package data
DEFAULT_SCHEMA_DIR = Path(__file__).parent / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    По умолчанию читает схемы, поставляемые вместе с пакетом (schema/ рядом с модулем).
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or DEFAULT_SCHEMA_DIR
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'settlement_request')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


_schema_loader: SchemaLoader | None = None


def get_schema_loader() -> SchemaLoader:
    """Общий загрузчик; создаётся при первом обращении."""
    global _schema_loader
    if _schema_loader is None:
        _schema_loader = SchemaLoader()
    return _schema_loader


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = get_schema_loader().load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class SettlementRequestValidator(ContractValidator):
    """Валидатор для settlement_request контракта."""

    def __init__(self):
        super().__init__("settlement_request")


class BalanceChangesValidator(ContractValidator):
    """Валидатор для balance_changes контракта."""

    def __init__(self):
        super().__init__("balance_changes")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_settlement_request(data: Dict[str, Any]) -> None:
    """
    Валидация settlement_request данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    SettlementRequestValidator().validate(data)


def validate_balance_changes(data: Dict[str, Any]) -> None:
    """
    Валидация balance_changes данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    BalanceChangesValidator().validate(data)
