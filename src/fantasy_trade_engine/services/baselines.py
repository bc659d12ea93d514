"""
Replacement Baseline Provider

Looks up replacement-level points per game by season and position.
"""

import logging
from collections.abc import Iterable

from fantasy_trade_engine.exceptions import MissingBaselineError
from fantasy_trade_engine.models.player import Position, PositionBaseline

logger = logging.getLogger(__name__)


class BaselineSet:
    """Per-position replacement baselines for a single season."""

    def __init__(
        self,
        season: int,
        points_by_position: dict[Position, float],
        default_ppg: float,
    ):
        self.season = season
        self._points = dict(points_by_position)
        self._default = default_ppg
        self._warned: set[Position] = set()

    def lookup(self, position: Position) -> float | None:
        """Replacement PPG for a position, None when the set has no row for it."""
        return self._points.get(position)

    def get(self, position: Position) -> float:
        """Replacement PPG for a position, or the configured default."""
        if position in self._points:
            return self._points[position]
        if position not in self._warned:
            self._warned.add(position)
            logger.warning(
                "No %s baseline for season %s; using default %.1f",
                position.value,
                self.season,
                self._default,
            )
        return self._default

    def flex_baseline(self, eligible: Iterable[Position]) -> float | None:
        """Minimum baseline among FLEX-eligible positions present in the set."""
        values = [self._points[pos] for pos in eligible if pos in self._points]
        return min(values) if values else None


class BaselineProvider:
    """
    Season-indexed baseline lookup.

    Raises MissingBaselineError when a season has no rows at all; that is a
    caller configuration error rather than sparse data.
    """

    def __init__(self, baselines: Iterable[PositionBaseline], default_ppg: float = 8.0):
        self.default_ppg = default_ppg
        self._by_season: dict[int, dict[Position, float]] = {}
        for row in baselines:
            self._by_season.setdefault(row.season, {})[row.position] = row.points_per_game

    def for_season(self, season: int) -> BaselineSet:
        """
        Get the baseline set for a season.

        Args:
            season: Season year

        Returns:
            BaselineSet for the season

        Raises:
            MissingBaselineError: No baselines were supplied for the season
        """
        points = self._by_season.get(season)
        if not points:
            raise MissingBaselineError(season)
        return BaselineSet(season, points, self.default_ppg)
