"""
Verification script for uniform draws: number, index, pick_from_list,
percentage and identifiers.
"""

import sys
import os
from collections import Counter

import numpy as np
import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from rng_facade.config.config import FacadeConfig, PercentagePolicy
from rng_facade.core.errors import EmptyInputError, InvalidParameterError, InvalidRangeError
from rng_facade.core.facade import RandomFacade
from rng_facade.core.identifiers import UINT64_MAX, Identifier128
from rng_facade.utils.logger import AuditLogger
from rng_facade.utils.rng import CentralizedRNG
from experiments.run_distribution_check import chi_square_independence, uuid128_quartile_table


def make_facade(seed: int = 42, **config) -> RandomFacade:
    return RandomFacade(CentralizedRNG(seed=seed), config=FacadeConfig(**config), logger=AuditLogger("test_uniform"))


def test_number_stays_in_range():
    facade = make_facade()

    ints = [facade.number(-3, 3) for _ in range(5000)]
    assert all(isinstance(v, int) for v in ints)
    assert min(ints) == -3 and max(ints) == 3

    reals = [facade.number(-1.5, 2.5) for _ in range(5000)]
    assert all(isinstance(v, float) for v in reals)
    assert all(-1.5 <= v <= 2.5 for v in reals)

    # Mixed bounds use the real adapter
    mixed = [facade.number(0, 1.0) for _ in range(1000)]
    assert all(isinstance(v, float) and 0.0 <= v <= 1.0 for v in mixed)

    assert facade.number(7, 7) == 7
    assert facade.number(2.5, 2.5) == 2.5
    assert isinstance(facade.number(np.int32(1), np.int32(4)), int)


def test_number_full_unsigned_range():
    facade = make_facade()
    draws = [facade.number(0, UINT64_MAX) for _ in range(100)]
    assert all(0 <= v <= UINT64_MAX for v in draws)

    with pytest.raises(InvalidParameterError):
        facade.number(-1, UINT64_MAX)


def test_number_extreme_real_bounds():
    facade = make_facade()

    # Span overflows a double but both bounds are finite
    wide = [facade.number(-1e308, 1e308) for _ in range(2000)]
    assert all(isinstance(v, float) and -1e308 <= v <= 1e308 for v in wide)
    assert min(wide) < 0.0 < max(wide)

    top = [facade.number(1e308, 1.7e308) for _ in range(500)]
    assert all(1e308 <= v <= 1.7e308 for v in top)

    tiny = [facade.number(0.0, 5e-324) for _ in range(100)]
    assert all(0.0 <= v <= 5e-324 for v in tiny)


def test_number_rejects_bad_input():
    facade = make_facade()
    with pytest.raises(InvalidRangeError):
        facade.number(5, 1)
    with pytest.raises(InvalidRangeError):
        facade.number(1.0, -1.0)
    with pytest.raises(ValueError):
        facade.number(5, 1)
    with pytest.raises(InvalidParameterError):
        facade.number(True, 5)
    with pytest.raises(InvalidParameterError):
        facade.number("1", 5)
    with pytest.raises(InvalidParameterError):
        facade.number(float("nan"), 1.0)


def test_rejected_call_leaves_generator_untouched():
    facade = make_facade(seed=7)
    twin = make_facade(seed=7)

    with pytest.raises(InvalidRangeError):
        facade.number(10, 0)
    with pytest.raises(EmptyInputError):
        facade.index([])

    assert [facade.uuid64() for _ in range(5)] == [twin.uuid64() for _ in range(5)]


def test_index_uniform():
    print("--- index uniformity ---")
    facade = make_facade()
    seq = ["a", "b", "c", "d", "e"]
    counts = Counter(facade.index(seq) for _ in range(10_000))
    print(f"index counts: {dict(sorted(counts.items()))}")

    assert set(counts) == {0, 1, 2, 3, 4}
    for position in range(5):
        assert abs(counts[position] / 10_000 - 0.2) < 0.02

    assert facade.index(["only"]) == 0
    assert 0 <= facade.index(np.arange(3)) <= 2


def test_index_empty():
    facade = make_facade()
    with pytest.raises(EmptyInputError):
        facade.index([])
    with pytest.raises(EmptyInputError):
        facade.index(())


def test_pick_from_list():
    print("--- pick_from_list [5, 2, 9] ---")
    facade = make_facade()
    counts = Counter(facade.pick_from_list([5, 2, 9]) for _ in range(10_000))
    print(f"pick counts: {dict(counts)}")

    assert set(counts) == {5, 2, 9}
    for value in (5, 2, 9):
        assert abs(counts[value] / 10_000 - 1 / 3) < 0.03

    assert facade.pick_from_list([4]) == 4
    assert facade.pick_from_list(np.array([3, 8])) in (3, 8)


def test_pick_from_list_bad_input():
    facade = make_facade()
    with pytest.raises(EmptyInputError):
        facade.pick_from_list([])
    with pytest.raises(InvalidParameterError):
        facade.pick_from_list([1, 2.5])


def test_percentage_clamped():
    facade = make_facade()
    assert not any(facade.percentage(0) for _ in range(10_000))
    assert all(facade.percentage(100) for _ in range(10_000))

    # Out-of-range inputs are clamped first
    assert not any(facade.percentage(-20) for _ in range(1000))
    assert all(facade.percentage(250) for _ in range(1000))

    rate = sum(facade.percentage(50) for _ in range(10_000)) / 10_000
    assert abs(rate - 0.5) < 0.03


def test_percentage_fractional_odds():
    facade = make_facade(seed=3)

    # 0.5 percent must not round up to a whole percent
    rate = sum(facade.percentage(0.5) for _ in range(100_000)) / 100_000
    assert abs(rate - 0.005) < 0.0015

    rate = sum(facade.percentage(50.5) for _ in range(40_000)) / 40_000
    assert abs(rate - 0.505) < 0.015


def test_percentage_clamp_is_audited():
    log = AuditLogger("test_percentage")
    facade = RandomFacade(CentralizedRNG(seed=1), config=FacadeConfig(), logger=log)

    facade.percentage(40)
    assert log.events_of("percentage_clamped") == []

    facade.percentage(140)
    events = log.events_of("percentage_clamped")
    assert len(events) == 1
    assert events[0].data["x"] == 140
    assert events[0].data["clamped"] == 100


def test_percentage_literal():
    facade = make_facade(percentage_policy=PercentagePolicy.LITERAL)

    # Roll covers [0, 100], so 100 percent still misses about 1 in 101
    rolls = [facade.percentage(100) for _ in range(20_200)]
    assert not all(rolls)
    assert sum(rolls) > 19_800

    assert all(facade.percentage(150) for _ in range(1000))
    assert not any(facade.percentage(-5) for _ in range(1000))

    clamped = make_facade()
    assert all(clamped.percentage(100, PercentagePolicy.CLAMPED) for _ in range(1000))
    assert not all(clamped.percentage(100, PercentagePolicy.LITERAL) for _ in range(20_200))


def test_uuid64_no_collisions():
    facade = make_facade()
    draws = [facade.uuid64() for _ in range(100_000)]
    assert all(isinstance(v, int) and 0 <= v <= UINT64_MAX for v in draws)
    assert len(set(draws)) == len(draws)
    # High bit is set about half the time
    assert abs(sum(v >> 63 for v in draws) / len(draws) - 0.5) < 0.01


def test_uuid128_halves_independent():
    print("--- uuid128 half independence ---")
    facade = make_facade(seed=2024)
    table = uuid128_quartile_table(facade, 8000)
    stat = chi_square_independence(table)
    print(f"chi-square (df=9): {stat:.3f}")

    assert table.sum() == 8000
    assert stat < 27.88


def test_identifier128_value_type():
    a = Identifier128(1, 2)
    assert a == Identifier128(1, 2)
    assert a != Identifier128(2, 1)
    assert hash(a) == hash(Identifier128(1, 2))
    assert int(a) == (1 << 64) | 2
    assert str(a) == "0000000000000001" + "0000000000000002"
    assert Identifier128.from_int(int(a)) == a

    with pytest.raises(InvalidParameterError):
        Identifier128(-1, 0)
    with pytest.raises(InvalidParameterError):
        Identifier128(0, UINT64_MAX + 1)
    with pytest.raises(InvalidParameterError):
        Identifier128.from_int(1 << 128)

    ident = make_facade().uuid128()
    assert isinstance(ident, Identifier128)
    assert len(ident.hex) == 32


if __name__ == "__main__":
    test_index_uniform()
    test_pick_from_list()
    test_uuid128_halves_independent()
    print("\nUniform draw verification SUCCESS")
