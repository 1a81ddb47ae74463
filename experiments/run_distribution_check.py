"""
Distribution Check Harness.

Responsibility boundaries:
- Runs every facade operation many times on one generator.
- Collects and prints empirical metrics (range violations, means,
  frequencies, identifier collisions, half independence).
"""

import sys
import os
from collections import Counter
from typing import Any, Dict, Optional

import numpy as np

# Ensure we can import the package from a source checkout
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from rng_facade.config.config import FacadeConfig
from rng_facade.core.facade import RandomFacade
from rng_facade.utils.rng import CentralizedRNG


def chi_square_independence(table: np.ndarray) -> float:
    """
    Pearson chi-square statistic for a contingency table, with expected
    counts taken from the row and column marginals.
    """
    table = np.asarray(table, dtype=float)
    total = table.sum()
    expected = np.outer(table.sum(axis=1), table.sum(axis=0)) / total
    return float(((table - expected) ** 2 / expected).sum())


def uuid128_quartile_table(facade: RandomFacade, num_draws: int) -> np.ndarray:
    """4x4 counts of (high quartile, low quartile) over uuid128 draws."""
    table = np.zeros((4, 4), dtype=np.int64)
    for _ in range(num_draws):
        ident = facade.uuid128()
        table[ident.high >> 62, ident.low >> 62] += 1
    return table


def run_distribution_check(num_draws: int = 10_000, seed: Optional[int] = None) -> Dict[str, Any]:
    facade = RandomFacade(CentralizedRNG(seed=seed), config=FacadeConfig())

    ints = [facade.number(-5, 5) for _ in range(num_draws)]
    reals = [facade.number(0.0, 1.0) for _ in range(num_draws)]
    bounded = [facade.weighted_number_in_range(0.0, 10.0, 5.0, 1.0) for _ in range(num_draws)]
    weighted_idx = [facade.weighted_index(range(20), 10, 3.0) for _ in range(num_draws)]
    picks = Counter(facade.pick_from_list([5, 2, 9]) for _ in range(num_draws))
    rolls = sum(facade.percentage(25) for _ in range(num_draws))
    uuids = [facade.uuid64() for _ in range(num_draws)]

    return {
        "draws": num_draws,
        "seed": facade.rng.seed,
        "number_int_violations": sum(1 for v in ints if not -5 <= v <= 5),
        "number_real_violations": sum(1 for v in reals if not 0.0 <= v <= 1.0),
        "number_real_mean": float(np.mean(reals)),
        "bounded_violations": sum(1 for v in bounded if not 0.0 <= v <= 10.0),
        "bounded_mean": float(np.mean(bounded)),
        "weighted_index_violations": sum(1 for v in weighted_idx if not 0 <= v <= 19),
        "weighted_index_mean": float(np.mean(weighted_idx)),
        "pick_frequencies": {k: v / num_draws for k, v in sorted(picks.items())},
        "percentage_25_rate": rolls / num_draws,
        "uuid64_collisions": num_draws - len(set(uuids)),
        "uuid128_chi_square": chi_square_independence(uuid128_quartile_table(facade, num_draws)),
    }


def main() -> None:
    metrics = run_distribution_check(10_000)

    print("\n" + "=" * 40)
    print("Distribution Check Metrics")
    print("=" * 40)
    for key, value in metrics.items():
        if isinstance(value, float):
            print(f"{key:28}: {value:.4f}")
        else:
            print(f"{key:28}: {value}")
    print("=" * 40)

    # df = 9 for a 4x4 table; 27.88 is the p = 0.001 critical value
    if metrics["uuid128_chi_square"] > 27.88:
        print("- uuid128 halves look dependent (chi-square above p=0.001 threshold).")
    else:
        print("- uuid128 halves consistent with independence.")


if __name__ == "__main__":
    main()
