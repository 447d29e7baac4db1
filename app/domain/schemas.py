# app/domain/schemas.py
import math
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


def _has_non_finite(value: Any) -> bool:
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, dict):
        return any(_has_non_finite(v) for v in value.values())
    if isinstance(value, (list, tuple)):
        return any(_has_non_finite(v) for v in value)
    return False


class Product(BaseModel):
    """
    Schema produktu.
    Tylko id jest wymagane, pozostale pola (name, qty, price...) sa
    przechowywane i zwracane bez zmian.
    """

    model_config = ConfigDict(extra="allow", allow_inf_nan=False)

    id: int

    #NaN/Infinity nie istnieja w JSON, pydantic zapisalby je jako null
    @model_validator(mode="after")
    def reject_non_finite(self):
        for field, value in (self.model_extra or {}).items():
            if _has_non_finite(value):
                raise ValueError(f"Field '{field}' must be a finite number")
        return self


class HealthOut(BaseModel):
    status: str
    store: str
