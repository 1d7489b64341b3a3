"""Engine configuration for deccalc."""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field

from deccalc.constants import DEFAULT_SCALE, SCALE_ENV_VAR


class CalculatorConfig(BaseModel):
    """Immutable configuration of a Calculator.

    Attributes:
        scale: Number of fractional digits kept in every arithmetic result
            (default: 15). Must be non-negative.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    scale: int = Field(default=DEFAULT_SCALE, ge=0)

    @classmethod
    def from_env(cls) -> CalculatorConfig:
        """Build a config from the environment.

        Reads DECCALC_SCALE; falls back to DEFAULT_SCALE when unset or empty.

        Raises:
            pydantic.ValidationError: If the variable is not a non-negative integer
        """
        raw = os.environ.get(SCALE_ENV_VAR, "").strip()
        if not raw:
            return cls()
        return cls(scale=raw)  # type: ignore[arg-type]


# Default configuration instance
DEFAULT_CONFIG = CalculatorConfig()
