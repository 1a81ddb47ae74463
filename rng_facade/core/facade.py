"""
Random Facade.

Responsibility boundaries:
- Maps raw output of one shared bit generator to uniform, normal,
  percentage, index and identifier draws.
- Validates every caller input before drawing.
- Module-level functions delegate to the calling thread's default facade.

Mutation constraints:
- The only state mutated is the bound generator, and only through numpy's
  own draw methods.
- A RandomFacade instance must be used from one thread at a time. The
  module-level functions are safe from any thread because each thread
  receives its own generator.
"""

import math
import threading
from typing import Any, Callable, Dict, MutableSequence, Optional, Sequence, Union

import numpy as np

from rng_facade.config.config import FacadeConfig, PercentagePolicy
from rng_facade.core.errors import (
    EmptyInputError,
    InvalidParameterError,
    InvalidRangeError,
    SamplingTimeoutError,
)
from rng_facade.core.identifiers import UINT64_MAX, Identifier128
from rng_facade.utils.logger import AuditLogger, get_audit_logger
from rng_facade.utils.rng import CentralizedRNG, shared_rng

Number = Union[int, float]

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


class _UseConfig:
    def __repr__(self) -> str:
        return "<config default>"


USE_CONFIG = _UseConfig()


def _is_integral(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def _is_real(value: Any) -> bool:
    return isinstance(value, (float, np.floating))


def _check_number(name: str, value: Any) -> None:
    if not (_is_integral(value) or _is_real(value)):
        raise InvalidParameterError(f"{name} must be an int or float, got {type(value).__name__}.")
    if _is_real(value) and not math.isfinite(value):
        raise InvalidParameterError(f"{name} must be finite, got {value!r}.")


def _check_std_dev(std_dev: Any) -> float:
    _check_number("std_dev", std_dev)
    if std_dev < 0:
        raise InvalidParameterError(f"std_dev must be >= 0, got {std_dev!r}.")
    return float(std_dev)


def _check_range(low: Any, high: Any) -> None:
    _check_number("min", low)
    _check_number("max", high)
    if low > high:
        raise InvalidRangeError(low, high)


def _converter(integral: bool) -> Callable[[float], Number]:
    # Integral targets truncate toward zero, like a C-style cast
    return math.trunc if integral else float


def _length(sequence: Sequence[Any]) -> int:
    size = len(sequence)
    if size == 0:
        raise EmptyInputError("Cannot draw an index from an empty sequence.")
    return size


class RandomFacade:
    """
    Distribution adapters over a single CentralizedRNG.
    """

    def __init__(self,
                 rng: Optional[CentralizedRNG] = None,
                 config: Optional[FacadeConfig] = None,
                 logger: Optional[AuditLogger] = None):
        self._config = config if config is not None else get_default_config()
        self._logger = logger if logger is not None else get_audit_logger()
        self._rng = rng if rng is not None else shared_rng(self._config.default_slot, self._logger)

    @property
    def config(self) -> FacadeConfig:
        return self._config

    @property
    def rng(self) -> CentralizedRNG:
        return self._rng

    @property
    def _gen(self) -> np.random.Generator:
        return self._rng.get_rng()

    def number(self, low: Number, high: Number) -> Number:
        """
        Draw a value uniformly from [low, high].

        Two integral bounds use the integer-uniform adapter and return an int;
        anything else uses the real-uniform adapter and returns a float.

        Raises:
            InvalidRangeError: low is greater than high.
            InvalidParameterError: a bound is not a finite int or float, or
                integral bounds do not fit in 64 bits.
        """
        _check_range(low, high)
        if _is_integral(low) and _is_integral(high):
            low, high = int(low), int(high)
            if low < INT64_MIN or high > UINT64_MAX or (low < 0 and high > INT64_MAX):
                raise InvalidParameterError(f"Integer range [{low}, {high}] does not fit in 64 bits.")
            dtype = np.uint64 if high > INT64_MAX else np.int64
            return int(self._gen.integers(low, high, dtype=dtype, endpoint=True))
        low, high = float(low), float(high)
        if low == high:
            return low
        u = float(self._gen.random())
        span = high - low
        if math.isfinite(span):
            value = low + span * u
        else:
            # Span overflows a double; interpolate without forming it
            value = low * (1.0 - u) + high * u
        return min(max(value, low), high)

    def weighted_number(self, mean: Number, std_dev: Any = USE_CONFIG) -> Number:
        """
        Draw once from a normal distribution centered at `mean`.

        Args:
            mean: Peak of the bell curve. An int mean yields an int result.
            std_dev: Standard deviation; defaults to config.default_std_dev.

        Returns:
            The draw, cast to the type of `mean`. No range restriction.
        """
        _check_number("mean", mean)
        std_dev = self._resolve_std_dev(std_dev)
        convert = _converter(_is_integral(mean))
        return convert(self._gen.normal(float(mean), std_dev))

    def weighted_number_in_range(self,
                                 low: Number,
                                 high: Number,
                                 mean: Number,
                                 std_dev: Any = USE_CONFIG,
                                 max_retries: Any = USE_CONFIG) -> Number:
        """
        Draw from a normal distribution, rejection-sampled into [low, high].

        Out-of-range draws are redrawn, never clamped, so the result follows
        the true conditional distribution. The caller must pick parameters
        that leave non-negligible probability mass inside the interval.

        Args:
            low: Inclusive lower bound.
            high: Inclusive upper bound. Two int bounds yield an int result.
            mean: Peak of the bell curve.
            std_dev: Standard deviation; defaults to config.default_std_dev.
            max_retries: Draw budget; defaults to config.max_rejection_retries.
                None loops until a draw lands in range.

        Raises:
            InvalidRangeError: low is greater than high.
            InvalidParameterError: bad mean/std_dev, or an unbounded loop that
                could never finish.
            SamplingTimeoutError: the retry budget ran out.
        """
        _check_range(low, high)
        _check_number("mean", mean)
        std_dev = self._resolve_std_dev(std_dev)
        max_retries = self._resolve_max_retries(max_retries)
        convert = _converter(_is_integral(low) and _is_integral(high))
        params = {"min": low, "max": high, "mean": mean, "std_dev": std_dev}
        return self._rejection_sample(float(mean), std_dev, convert, low, high, max_retries, params)

    def percentage(self, x: Number, policy: Optional[PercentagePolicy] = None) -> bool:
        """
        Roll against a percentage; True with probability `x` percent.

        CLAMPED clamps `x` into [0, 100] and rolls a real in [0, 100), so
        0 never succeeds, 100 always does and fractional percentages keep
        their exact odds. LITERAL keeps the historical roll: integer in
        [0, 100] inclusive compared with the unclamped `x`.
        """
        _check_number("x", x)
        policy = policy if policy is not None else self._config.percentage_policy
        if policy is PercentagePolicy.LITERAL:
            roll = int(self._gen.integers(0, 100, endpoint=True))
            return bool(roll < x)

        clamped = max(0, min(100, x))
        if clamped != x:
            self._logger.log_event("percentage_clamped", {"x": x, "clamped": clamped})
        roll = float(self._gen.random()) * 100.0
        return bool(roll < clamped)

    def uuid64(self) -> int:
        """Uniform unsigned 64-bit identifier. Not collision-free, not cryptographic."""
        return int(self._gen.integers(0, UINT64_MAX, dtype=np.uint64, endpoint=True))

    def uuid128(self) -> Identifier128:
        high = self.uuid64()
        low = self.uuid64()
        return Identifier128(high, low)

    def index(self, sequence: Sequence[Any]) -> int:
        """Uniform position in [0, len(sequence) - 1]."""
        size = _length(sequence)
        return int(self._gen.integers(0, size - 1, endpoint=True))

    def weighted_index(self,
                       sequence: Sequence[Any],
                       mean: Number,
                       std_dev: Any = USE_CONFIG,
                       max_retries: Any = USE_CONFIG) -> int:
        """
        Position in [0, len(sequence) - 1] drawn from N(mean, std_dev).

        Draws are truncated toward zero and rejection-sampled until in range.
        Same retry policy and errors as weighted_number_in_range, plus
        EmptyInputError for an empty sequence.
        """
        size = _length(sequence)
        _check_number("mean", mean)
        std_dev = self._resolve_std_dev(std_dev)
        max_retries = self._resolve_max_retries(max_retries)
        params = {"length": size, "mean": mean, "std_dev": std_dev}
        return self._rejection_sample(float(mean), std_dev, math.trunc, 0, size - 1, max_retries, params)

    def pick_from_list(self, indices: Sequence[int]) -> int:
        """
        Pick one element uniformly from a list of candidate index values.

        Raises:
            EmptyInputError: `indices` is empty.
            InvalidParameterError: an element is not an integer.
        """
        size = _length(indices)
        for value in indices:
            if not _is_integral(value):
                raise InvalidParameterError(f"indices must hold integers, found {value!r}.")
        position = int(self._gen.integers(0, size - 1, endpoint=True))
        return int(indices[position])

    def generator_handle(self) -> np.random.Generator:
        """The shared generator itself; draws through it advance this facade's stream."""
        return self._gen

    def shuffle(self, sequence: MutableSequence[Any]) -> None:
        self._gen.shuffle(sequence)

    def _resolve_std_dev(self, std_dev: Any) -> float:
        if std_dev is USE_CONFIG:
            return float(self._config.default_std_dev)
        return _check_std_dev(std_dev)

    def _resolve_max_retries(self, max_retries: Any) -> Optional[int]:
        if max_retries is USE_CONFIG:
            return self._config.max_rejection_retries
        if max_retries is None:
            return None
        if not _is_integral(max_retries) or max_retries < 1:
            raise InvalidParameterError(f"max_retries must be a positive int or None, got {max_retries!r}.")
        return int(max_retries)

    def _rejection_sample(self,
                          mean: float,
                          std_dev: float,
                          convert: Callable[[float], Number],
                          low: Number,
                          high: Number,
                          max_retries: Optional[int],
                          params: Dict[str, Any]) -> Number:
        # A zero-width bell either always or never lands in range
        if std_dev == 0:
            value = convert(mean)
            if low <= value <= high:
                return value
            if max_retries is None:
                raise InvalidParameterError(
                    f"std_dev is 0 and mean {mean!r} falls outside [{low}, {high}]; "
                    "unbounded sampling would never finish."
                )
            self._timeout(0, params)

        attempts = 0
        while max_retries is None or attempts < max_retries:
            attempts += 1
            value = convert(self._gen.normal(mean, std_dev))
            if low <= value <= high:
                return value
        self._timeout(attempts, params)

    def _timeout(self, attempts: int, params: Dict[str, Any]) -> None:
        self._logger.log_event("sampling_timeout", dict(params, attempts=attempts))
        raise SamplingTimeoutError(attempts, params)


_DEFAULT_CONFIG: Optional[FacadeConfig] = None
_local = threading.local()


def get_default_config() -> FacadeConfig:
    """Configuration used by module-level functions, read from the environment once."""
    global _DEFAULT_CONFIG
    if _DEFAULT_CONFIG is None:
        _DEFAULT_CONFIG = FacadeConfig.from_env()
    return _DEFAULT_CONFIG


def set_default_config(config: Optional[FacadeConfig]) -> None:
    """
    Replace the module-level configuration.

    Passing None re-reads the environment on next use. Registered generators
    are kept; only the draw policy changes.
    """
    global _DEFAULT_CONFIG
    _DEFAULT_CONFIG = config


def default_facade() -> RandomFacade:
    """Return the calling thread's facade bound to its default slot."""
    config = get_default_config()
    facade = getattr(_local, "facade", None)
    if facade is None or facade.config is not config:
        facade = RandomFacade(shared_rng(config.default_slot), config=config)
        _local.facade = facade
    return facade


def facade_for_slot(slot: str) -> RandomFacade:
    """Facade bound to a named slot on the calling thread."""
    return RandomFacade(shared_rng(slot), config=get_default_config())


def number(low: Number, high: Number) -> Number:
    return default_facade().number(low, high)


def weighted_number(mean: Number, std_dev: Any = USE_CONFIG) -> Number:
    return default_facade().weighted_number(mean, std_dev)


def weighted_number_in_range(low: Number, high: Number, mean: Number,
                             std_dev: Any = USE_CONFIG, max_retries: Any = USE_CONFIG) -> Number:
    return default_facade().weighted_number_in_range(low, high, mean, std_dev, max_retries)


def percentage(x: Number, policy: Optional[PercentagePolicy] = None) -> bool:
    return default_facade().percentage(x, policy)


def uuid64() -> int:
    return default_facade().uuid64()


def uuid128() -> Identifier128:
    return default_facade().uuid128()


def index(sequence: Sequence[Any]) -> int:
    return default_facade().index(sequence)


def weighted_index(sequence: Sequence[Any], mean: Number,
                   std_dev: Any = USE_CONFIG, max_retries: Any = USE_CONFIG) -> int:
    return default_facade().weighted_index(sequence, mean, std_dev, max_retries)


def pick_from_list(indices: Sequence[int]) -> int:
    return default_facade().pick_from_list(indices)


def generator_handle() -> np.random.Generator:
    return default_facade().generator_handle()


def shuffle(sequence: MutableSequence[Any]) -> None:
    default_facade().shuffle(sequence)
