"""Tax bracket model."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class TaxBracket(BaseModel):
    model_config = ConfigDict(frozen=True)

    rate: Decimal = Field(ge=0, le=1)
    cap: Decimal | None  # upper taxable-income bound; None for the top bracket
    label: str

    @property
    def is_unbounded(self) -> bool:
        return self.cap is None
