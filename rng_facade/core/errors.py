"""
Error taxonomy for the random facade.

Responsibility boundaries:
- Every failure here is a caller-input validation failure.
- Raised before any distribution adapter draws, so a rejected call
  never advances generator state.
"""

from typing import Any, Dict, Optional


class RandomFacadeError(Exception):
    pass


class InvalidRangeError(RandomFacadeError, ValueError):
    """Lower bound is greater than upper bound."""

    def __init__(self, low: Any, high: Any):
        super().__init__(f"Invalid range: min ({low!r}) is greater than max ({high!r}).")
        self.low = low
        self.high = high


class InvalidParameterError(RandomFacadeError, ValueError):
    pass


class EmptyInputError(RandomFacadeError, ValueError):
    pass


class SamplingTimeoutError(RandomFacadeError, RuntimeError):
    """
    Rejection sampling exhausted its retry budget.

    The target interval holds too little probability mass for the given
    mean and standard deviation.
    """

    def __init__(self, attempts: int, parameters: Optional[Dict[str, Any]] = None):
        self.attempts = attempts
        self.parameters = dict(parameters or {})
        details = ", ".join(f"{k}={v!r}" for k, v in self.parameters.items())
        super().__init__(f"Rejection sampling gave up after {attempts} attempts ({details}).")
