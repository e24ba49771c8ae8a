"""
Diameter growth sequences for lianas and trees.

Every sequence is the cumulative sum of a per-year increment vector whose
year-0 element is the starting diameter:

    D(0) = D0
    D(t) = D(t-1) + rate * multiplier(t)

Control trees keep the pre-treatment rate throughout. Liberated trees
follow a release schedule adapted from Finlayson et al. (2022): growth
doubles for ten years after liana cutting and then steps back down to
the control rate.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, TYPE_CHECKING

import numpy as np

from .exceptions import InvalidParameterError

if TYPE_CHECKING:
    from .parameters import SimulationParameters


@dataclass(frozen=True)
class ReleasePeriod:
    """Growth multiplier applied to the control rate over a range of years.

    Attributes:
        start: First year of the period (inclusive)
        end: Last year of the period (inclusive), None for open-ended
        multiplier: Factor applied to the control growth rate
    """
    start: int
    end: Optional[int]
    multiplier: float

    def covers(self, year: int) -> bool:
        if year < self.start:
            return False
        return self.end is None or year <= self.end


class ReleaseSchedule:
    """Ordered set of release periods following liana cutting."""

    def __init__(self, periods: Iterable[ReleasePeriod]):
        self.periods: Tuple[ReleasePeriod, ...] = tuple(sorted(periods, key=lambda p: p.start))

    @classmethod
    def default(cls) -> 'ReleaseSchedule':
        """Schedule adapted from Finlayson et al. (2022)."""
        return cls([
            ReleasePeriod(1, 10, 2.0),
            ReleasePeriod(11, 13, 1.75),
            ReleasePeriod(14, 16, 1.5),
            ReleasePeriod(17, 19, 1.25),
            ReleasePeriod(20, None, 1.0),
        ])

    @classmethod
    def from_records(cls, records: Sequence[dict]) -> 'ReleaseSchedule':
        """Build a schedule from ``{start, end, multiplier}`` mappings.

        A missing or null ``end`` makes the period open-ended.
        """
        periods = []
        for record in records:
            if not isinstance(record, dict):
                raise InvalidParameterError('release_schedule', record, "each period must be a mapping")
            try:
                end = record.get('end')
                periods.append(ReleasePeriod(
                    start=int(record['start']),
                    end=None if end is None else int(end),
                    multiplier=float(record['multiplier']),
                ))
            except (KeyError, TypeError, ValueError) as e:
                raise InvalidParameterError('release_schedule', record, f"malformed period: {e}") from e
        return cls(periods)

    def to_records(self) -> List[dict]:
        """Periods as plain mappings; open-ended periods carry no ``end``."""
        records = []
        for p in self.periods:
            record = {'start': p.start, 'end': p.end, 'multiplier': p.multiplier}
            if p.end is None:
                del record['end']
            records.append(record)
        return records

    def multiplier(self, year: int) -> float:
        """Growth multiplier for a year; 1.0 where no period applies."""
        for period in self.periods:
            if period.covers(year):
                return period.multiplier
        return 1.0

    def multipliers(self, years: np.ndarray) -> np.ndarray:
        return np.array([self.multiplier(int(y)) for y in years], dtype=float)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ReleaseSchedule):
            return NotImplemented
        return self.periods == other.periods

    def __hash__(self) -> int:
        return hash(self.periods)

    def __repr__(self) -> str:
        return f"ReleaseSchedule({list(self.periods)!r})"


def cumulative_growth(years: np.ndarray, start: float, increments: np.ndarray) -> np.ndarray:
    """Accumulate per-year increments onto a starting diameter.

    Args:
        years: Year vector; the element at the first (minimum) year is the start
        start: Diameter at the first year (cm)
        increments: Per-year increments aligned with ``years`` (cm)

    Returns:
        Cumulative diameter for every year (cm)
    """
    steps = np.asarray(increments, dtype=float).copy()
    steps[np.argmin(years)] = start
    return np.cumsum(steps)


def liana_diameter_series(start_dbh: float, params: 'SimulationParameters') -> np.ndarray:
    """Diameter of a single liana over the simulation period (cm)."""
    years = params.year_vector()
    increments = np.full(len(years), params.liana_growth_rate, dtype=float)
    return cumulative_growth(years, start_dbh, increments)


def control_diameter_series(params: 'SimulationParameters') -> np.ndarray:
    """DBH of an untreated tree; growth stays at pre-treatment levels (cm)."""
    years = params.year_vector()
    increments = np.full(len(years), params.tree_growth_rate, dtype=float)
    return cumulative_growth(years, params.tree_dbh, increments)


def treated_diameter_series(params: 'SimulationParameters') -> np.ndarray:
    """DBH of a tree liberated from lianas at year 0 (cm)."""
    years = params.year_vector()
    increments = params.tree_growth_rate * params.release_schedule.multipliers(years)
    return cumulative_growth(years, params.tree_dbh, increments)
