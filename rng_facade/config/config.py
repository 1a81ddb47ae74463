"""
Facade Configuration.

Responsibility boundaries:
- Holds draw defaults, the rejection-sampling retry budget and the
  percentage roll policy.
- Must be passed to a RandomFacade at construction; module-level
  functions use the environment-derived default.

Mutation constraints:
- Must freeze after initialization so a facade's policy cannot drift between draws.
"""

import math
import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from rng_facade.core.errors import InvalidParameterError


class PercentagePolicy(Enum):
    CLAMPED = "clamped"
    LITERAL = "literal"


_UNBOUNDED_TOKENS = ("none", "unbounded")


@dataclass(frozen=True)
class FacadeConfig:
    """
    Immutable container defining how a facade draws values.
    """
    default_std_dev: float = 10.0
    # None means the rejection loops may run forever
    max_rejection_retries: Optional[int] = 100_000
    percentage_policy: PercentagePolicy = PercentagePolicy.CLAMPED
    default_slot: str = "default"

    def __post_init__(self) -> None:
        std_dev = self.default_std_dev
        if (not isinstance(std_dev, (int, float)) or isinstance(std_dev, bool)
                or not math.isfinite(std_dev) or std_dev < 0):
            raise InvalidParameterError(
                f"default_std_dev must be a finite number >= 0, got {std_dev!r}."
            )
        if self.max_rejection_retries is not None and self.max_rejection_retries < 1:
            raise InvalidParameterError(
                f"max_rejection_retries must be >= 1 or None, got {self.max_rejection_retries!r}."
            )
        if not isinstance(self.percentage_policy, PercentagePolicy):
            raise InvalidParameterError(
                f"percentage_policy must be a PercentagePolicy, got {self.percentage_policy!r}."
            )
        if not self.default_slot:
            raise InvalidParameterError("default_slot must be a non-empty string.")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "FacadeConfig":
        """
        Build a configuration from RNG_FACADE_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ.

        Returns:
            A frozen FacadeConfig; unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        kwargs = {}

        std_dev = env.get("RNG_FACADE_STD_DEV")
        if std_dev is not None:
            try:
                kwargs["default_std_dev"] = float(std_dev)
            except ValueError:
                raise InvalidParameterError(f"RNG_FACADE_STD_DEV is not a number: {std_dev!r}.")

        retries = env.get("RNG_FACADE_MAX_RETRIES")
        if retries is not None:
            if retries.strip().lower() in _UNBOUNDED_TOKENS:
                kwargs["max_rejection_retries"] = None
            else:
                try:
                    kwargs["max_rejection_retries"] = int(retries)
                except ValueError:
                    raise InvalidParameterError(f"RNG_FACADE_MAX_RETRIES is not an integer: {retries!r}.")

        policy = env.get("RNG_FACADE_PERCENTAGE_POLICY")
        if policy is not None:
            try:
                kwargs["percentage_policy"] = PercentagePolicy(policy.strip().lower())
            except ValueError:
                raise InvalidParameterError(
                    f"RNG_FACADE_PERCENTAGE_POLICY must be 'clamped' or 'literal', got {policy!r}."
                )

        slot = env.get("RNG_FACADE_SLOT")
        if slot is not None:
            kwargs["default_slot"] = slot

        return cls(**kwargs)
