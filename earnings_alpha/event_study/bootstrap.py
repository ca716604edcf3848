"""
Bootstrap Resampling of Group CAAR.

Each iteration draws a subset of every group, recomputes CAAR on the subset,
and returns its curves as an isolated result. A final reduction averages the
curves across iterations.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence, Union

import numpy as np
import pandas as pd

from .aggregation import aggregate, event_time_table, to_event_time
from .constants import ANCHOR_OFFSET
from .models import Group, StockUniverse

logger = logging.getLogger(__name__)

RandomSource = Union[None, int, np.random.Generator]


def resolve_rng(rng: RandomSource = None) -> np.random.Generator:
    """
    Return a numpy Generator.

    None gives a generator seeded from OS entropy, an int gives a seeded one,
    and a Generator is used as-is.
    """
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def sample_members(
    members: Sequence[str],
    sample_size: int,
    rng: np.random.Generator
) -> List[str]:
    """
    Draw sample_size distinct members without replacement.

    If the population is not larger than the sample size, the whole
    population is returned in its original order and no randomness is drawn.
    """
    if len(members) <= sample_size:
        return list(members)

    order = rng.permutation(len(members))[:sample_size]
    return [members[i] for i in order]


def run_iteration(
    groups: Mapping[str, Group],
    universe: StockUniverse,
    sample_size: int,
    rng: np.random.Generator
) -> Dict[str, np.ndarray]:
    """
    One bootstrap round: sample each group and compute the sample CAAR.

    Returns:
        Dictionary mapping group name to that sample's CAAR
    """
    caars = {}
    for name, group in groups.items():
        sample = universe.resolve(sample_members(group.members, sample_size, rng))
        _, caar = aggregate([stock.abnormal_returns for stock in sample])
        caars[name] = caar
    return caars


def average_caar_curves(curves: Sequence[np.ndarray]) -> np.ndarray:
    """
    Elementwise mean of several CAAR curves.

    Curves are truncated to the shortest one before averaging.
    """
    if len(curves) == 0:
        return np.empty(0, dtype=float)

    n_days = min(len(c) for c in curves)
    stacked = np.vstack([np.asarray(c, dtype=float)[:n_days] for c in curves])

    with np.errstate(invalid='ignore'):
        return stacked.mean(axis=0)


@dataclass
class BootstrapResult:
    """Per-iteration CAAR curves and their cross-iteration average, per group."""

    sample_size: int
    iterations: int
    anchor_offset: int
    iteration_caars: List[Dict[str, np.ndarray]] = field(default_factory=list)
    average_caar: Dict[str, np.ndarray] = field(default_factory=dict)

    def curve(self, name: str) -> pd.Series:
        """Bootstrapped CAAR for one group, indexed by event day."""
        if name not in self.average_caar:
            raise ValueError(
                f"Unknown group '{name}'. Expected one of: {', '.join(self.average_caar)}."
            )
        return to_event_time(self.average_caar[name], self.anchor_offset, name=name)

    def to_frame(self) -> pd.DataFrame:
        """Day-indexed table with one bootstrapped CAAR column per group."""
        return event_time_table(self.average_caar, self.anchor_offset)


def bootstrap_caar(
    groups: Mapping[str, Group],
    universe: StockUniverse,
    sample_size: int,
    iterations: int,
    rng: RandomSource = None,
    anchor_offset: int = ANCHOR_OFFSET
) -> BootstrapResult:
    """
    Estimate the stability of group CAAR by repeated subsampling.

    Args:
        groups: Group name to Group (membership by symbol)
        universe: Store holding the member stocks
        sample_size: Members drawn per group per iteration. A group smaller
                     than this is used whole.
        iterations: Number of rounds
        rng: Random source; None seeds from OS entropy (non-reproducible)
        anchor_offset: Day offset subtracted from the index when reporting

    Returns:
        BootstrapResult with the per-iteration curves and their averages

    Raises:
        ValueError: If sample_size or iterations is not positive
    """
    if sample_size <= 0:
        raise ValueError(f"sample_size must be positive, got {sample_size}.")
    if iterations <= 0:
        raise ValueError(f"iterations must be positive, got {iterations}.")

    generator = resolve_rng(rng)

    for name, group in groups.items():
        if len(group) <= sample_size:
            logger.info(
                f"Group {name} has {len(group)} stocks (<= sample size {sample_size}); "
                f"using the full group every iteration."
            )

    logger.info(f"Bootstrapping {iterations} iterations with sample size {sample_size}...")

    iteration_caars = []
    for i in range(iterations):
        if (i + 1) % 10 == 0 or (i + 1) == iterations:
            logger.info(f"Bootstrapping iteration {i + 1}/{iterations}...")
        iteration_caars.append(run_iteration(groups, universe, sample_size, generator))

    # Reduction over the joined iteration results
    average_caar = {
        name: average_caar_curves([result[name] for result in iteration_caars])
        for name in groups
    }

    return BootstrapResult(
        sample_size=sample_size,
        iterations=iterations,
        anchor_offset=anchor_offset,
        iteration_caars=iteration_caars,
        average_caar=average_caar,
    )
