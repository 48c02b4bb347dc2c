"""
config.py

Validated per-emitter settings.
"""

import math

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import InvalidArgumentError

DEFAULT_MAX_LISTENERS = 10


class EmitterOptions(BaseModel):
    """Per-emitter settings."""

    model_config = ConfigDict(frozen=True)

    # 软上限，只用于告警，不会拒绝注册
    max_listeners: int | float = DEFAULT_MAX_LISTENERS

    @field_validator("max_listeners", mode="before")
    @classmethod
    def _check_count(cls, value: object) -> object:
        if isinstance(value, bool) or not isinstance(value, int | float):
            msg = "Count must be a number"
            raise ValueError(msg)  # noqa: TRY004
        if math.isnan(value) or math.isinf(value) or value < 0:
            msg = "Count must be a finite, non-negative number"
            raise ValueError(msg)
        return value


def validate_max_listeners(count: object) -> int | float:
    """Return ``count`` if it is usable as a max-listeners cap, else raise InvalidArgumentError."""
    try:
        return EmitterOptions(max_listeners=count).max_listeners
    except ValidationError as e:
        msg = f"Count must be a finite, non-negative number, got {count!r}"
        raise InvalidArgumentError(msg) from e


__all__ = ["DEFAULT_MAX_LISTENERS", "EmitterOptions", "validate_max_listeners"]
