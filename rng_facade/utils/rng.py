"""
Centralized Random Number Generator Utility.

This module owns every bit generator behind the facade: one numpy
Generator over MT19937 per CentralizedRNG, seeded once from a
high-resolution clock.

Responsibility boundaries:
- Must be the ONLY place a bit generator is constructed.
- Facades accept a CentralizedRNG instance, never build their own numpy Generator.
- Slots replace per-call-site static generators: each (thread, slot) pair
  owns exactly one CentralizedRNG for the life of the thread.

Mutation constraints:
- The internal state of the RNG is mutated only when drawing random numbers.
- The seed is set once during initialization; slots are never reseeded or reset.
- A CentralizedRNG is not thread-safe. The slot registry is thread-local, so
  shared_rng() never hands the same instance to two threads.
"""

import itertools
import threading
import time
from typing import Dict, List, Optional

import numpy as np

from rng_facade.utils.logger import AuditLogger, get_audit_logger

_SEED_MASK = (1 << 64) - 1
_seed_counter = itertools.count(1)
_registry = threading.local()


def time_seed() -> int:
    """
    Derive a fresh 64-bit seed from the high-resolution clock.

    The thread id and a process-wide counter are mixed in so two generators
    created within the same clock tick still get different seeds.
    """
    seed = time.perf_counter_ns() ^ (time.time_ns() << 1)
    seed ^= threading.get_ident() << 17
    seed ^= next(_seed_counter) * 0x9E3779B97F4A7C15
    return seed & _SEED_MASK


class CentralizedRNG:
    """
    A single seeded bit generator shared by every facade bound to it.
    """

    def __init__(self, seed: Optional[int] = None, slot: Optional[str] = None) -> None:
        """
        Initialize the RNG.

        Args:
            seed: An integer seed for deterministic execution. Omit it for a
                time-based seed; reproducibility across runs is not a goal.
            slot: Registry slot name this instance was created for, if any.
        """
        self._seed = time_seed() if seed is None else int(seed)
        self._slot = slot
        self._rng_instance = np.random.Generator(np.random.MT19937(self._seed))

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def slot(self) -> Optional[str]:
        return self._slot

    def get_rng(self) -> np.random.Generator:
        """
        Get the underlying RNG instance.

        Returns:
            The shared numpy Generator itself, never a copy. Draws through it
            advance the same stream every bound facade uses.
        """
        return self._rng_instance

    def __repr__(self) -> str:
        return f"CentralizedRNG(slot={self._slot!r}, seed={self._seed})"


def _slots() -> Dict[str, CentralizedRNG]:
    slots = getattr(_registry, "slots", None)
    if slots is None:
        slots = {}
        _registry.slots = slots
    return slots


def shared_rng(slot: str = "default", logger: Optional[AuditLogger] = None) -> CentralizedRNG:
    """
    Return the calling thread's generator for `slot`, creating it lazily.

    Args:
        slot: Name of the generator slot. Callers naming the same slot on the
            same thread share one generator.
        logger: Audit logger that records the creation event.

    Returns:
        The CentralizedRNG registered for (current thread, slot).
    """
    slots = _slots()
    rng = slots.get(slot)
    if rng is None:
        rng = CentralizedRNG(slot=slot)
        slots[slot] = rng
        (logger or get_audit_logger()).log_event("generator_created", {
            "slot": slot,
            "seed": rng.seed,
            "thread": threading.current_thread().name,
        })
    return rng


def registered_slots() -> List[str]:
    """Names of the slots created so far on the calling thread."""
    return list(_slots().keys())
