"""
DenomDefinition — Определение denom

Immutable Pydantic модель с атрибутами denom, влияющими на перевод:
- issuer: адрес, создавший denom (освобождён от burn/commission по нему)
- burn_rate: доля сверх перевода, которая сжигается
- commission_rate: доля сверх перевода, которая уходит issuer'у

Пример: перевод 100 при burn_rate 0.2 списывает 120 с отправителя,
получатель получает 100, 20 сжигается.
"""

from pydantic import BaseModel, Field


class DenomDefinition(BaseModel):
    """Определение denom (issuer и ставки)."""

    denom: str = Field(..., min_length=1, description="Уникальный идентификатор denom")
    issuer: str = Field(..., min_length=1, description="Адрес issuer'а")
    burn_rate: float = Field(
        ..., ge=0, le=1, allow_inf_nan=False, description="Ставка burn (фракция, 0-1)"
    )
    commission_rate: float = Field(
        ..., ge=0, le=1, allow_inf_nan=False, description="Ставка commission (фракция, 0-1)"
    )

    model_config = {"frozen": True}

    def is_issuer(self, address: str) -> bool:
        return address == self.issuer
