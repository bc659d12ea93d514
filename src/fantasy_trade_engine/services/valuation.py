"""
Player Valuation Service

Prices every player from four weighted components:

- anchor: most recent auction price (0 when unknown)
- delta_perf: EMA-smoothed weekly performance surprise, in dollars
- vorp: projected points over replacement, in dollars
- global: market-wide adjustment (0 in the baseline model)
"""

import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from functools import reduce

import numpy as np

from fantasy_trade_engine.config import EngineSettings, get_settings
from fantasy_trade_engine.models.league import LeagueSnapshot
from fantasy_trade_engine.models.player import Player, Position
from fantasy_trade_engine.models.valuation import (
    PriceRange,
    Valuation,
    ValuationComponents,
    ValuationMetadata,
    ValuationResult,
)
from fantasy_trade_engine.services.baselines import BaselineProvider, BaselineSet
from fantasy_trade_engine.services.calibration import ValuePerPointCalibrator

logger = logging.getLogger(__name__)


def position_projection_means(players: Iterable[Player]) -> dict[Position, float]:
    """Mean latest projection per position, over players that have one."""
    by_position: dict[Position, list[float]] = {}
    for player in sorted(players, key=lambda p: p.player_id):
        latest = player.latest_projection
        if latest is not None:
            by_position.setdefault(player.position, []).append(latest.points)
    return {pos: float(np.mean(points)) for pos, points in by_position.items()}


class ValuationEngine:
    """
    Computes player prices for a league snapshot.

    All inputs are read-only; the same snapshot and settings always produce
    the same prices.
    """

    def __init__(self, settings: EngineSettings | None = None):
        self.settings = settings or get_settings()
        self.calibrator = ValuePerPointCalibrator(
            epsilon=self.settings.vorp_epsilon,
            floor=self.settings.vpp_floor,
            default=self.settings.vpp_default,
            blend_weight=self.settings.vpp_blend_weight,
        )

    # ==================== Components ====================

    def projected_ppg(
        self,
        player: Player,
        baselines: BaselineSet,
        position_means: dict[Position, float],
    ) -> float:
        """
        Projected points per game.

        Priority: latest season projection, then a blend of the trailing
        actual average with the position mean, then the position baseline.
        """
        latest = player.latest_projection
        if latest is not None:
            return latest.points

        baseline = baselines.get(player.position)
        recent = player.recent_logs(self.settings.trailing_window)
        if recent:
            trailing = float(np.mean([log.points for log in recent]))
            position_mean = position_means.get(player.position, baseline)
            return (
                self.settings.trailing_weight * trailing
                + self.settings.position_mean_weight * position_mean
            )

        return baseline

    def smoothed_error(self, player: Player, projected: float) -> float:
        """EMA of weekly (actual - projected) error, oldest week first, seeded at 0."""
        alpha = self.settings.ema_alpha
        chronological = sorted(
            player.recent_logs(self.settings.trailing_window), key=lambda log: log.week
        )
        return reduce(
            lambda acc, log: alpha * (log.points - projected) + (1.0 - alpha) * acc,
            chronological,
            0.0,
        )

    def components(
        self,
        player: Player,
        projected: float,
        baseline: float,
        vpp: float,
    ) -> ValuationComponents:
        anchor = player.auction_price if player.auction_price is not None else 0.0
        delta_perf = self.smoothed_error(player, projected) * vpp * self.settings.perf_horizon_weeks
        vorp = (projected - baseline) * vpp * self.settings.vorp_horizon_weeks
        return ValuationComponents(anchor=anchor, delta_perf=delta_perf, vorp=vorp, global_adj=0.0)

    def price(self, components: ValuationComponents) -> float:
        """Weighted blend of components, floored at the minimum price."""
        s = self.settings
        raw = (
            s.weight_anchor * components.anchor
            + s.weight_perf * (components.anchor + components.delta_perf)
            + s.weight_vorp * components.vorp
            + s.weight_global * components.global_adj
        )
        return max(s.min_price, raw)

    # ==================== Players ====================

    def calibrate(
        self,
        players: Iterable[Player],
        baselines: BaselineSet,
        position_means: dict[Position, float],
    ) -> float:
        """Value per point from players with a known auction price."""
        priced = [
            (
                player.auction_price,
                self.projected_ppg(player, baselines, position_means),
                baselines.get(player.position),
            )
            for player in sorted(players, key=lambda p: p.player_id)
            if player.auction_price is not None
        ]
        return self.calibrator.calibrate(priced)

    def value_player(
        self,
        player: Player,
        baselines: BaselineSet,
        vpp: float,
        position_means: dict[Position, float],
        computed_at: datetime,
    ) -> Valuation:
        """Price a single player."""
        projected = self.projected_ppg(player, baselines, position_means)
        baseline = baselines.get(player.position)
        components = self.components(player, projected, baseline, vpp)

        return Valuation(
            player_id=player.player_id,
            player_name=player.display_name,
            position=player.position,
            price=self.price(components),
            projected_ppg=projected,
            components=components,
            computed_at=computed_at,
            engine_version=self.settings.engine_version,
        )

    def value_players(
        self,
        players: Iterable[Player],
        baselines: BaselineSet,
        computed_at: datetime | None = None,
    ) -> tuple[float, list[Valuation]]:
        """
        Price a collection of players against one baseline set.

        Returns:
            (vpp, valuations sorted by player id)
        """
        computed_at = computed_at or datetime.now(timezone.utc)
        ordered = sorted(players, key=lambda p: p.player_id)
        position_means = position_projection_means(ordered)
        vpp = self.calibrate(ordered, baselines, position_means)

        valuations = [
            self.value_player(player, baselines, vpp, position_means, computed_at)
            for player in ordered
        ]
        return vpp, valuations

    # ==================== League ====================

    def compute_league(
        self,
        snapshot: LeagueSnapshot,
        computed_at: datetime | None = None,
    ) -> ValuationResult:
        """
        Compute valuations for every rostered player in a league.

        Args:
            snapshot: Materialized league data
            computed_at: Timestamp stamped on every valuation (defaults to now)

        Returns:
            ValuationResult with per-player valuations and run metadata

        Raises:
            MissingBaselineError: The league season has no baselines
        """
        computed_at = computed_at or datetime.now(timezone.utc)
        baselines = BaselineProvider(
            snapshot.baselines, self.settings.default_replacement_ppg
        ).for_season(snapshot.season)

        players = []
        for player_id in snapshot.rostered_player_ids():
            player = snapshot.players.get(player_id)
            if player is None:
                logger.warning(
                    "Rostered player %s missing from league %s snapshot; skipping",
                    player_id,
                    snapshot.league_id,
                )
                continue
            players.append(player)

        logger.info(
            "Computing valuations for %d players in league %s (engine %s)",
            len(players),
            snapshot.league_id,
            self.settings.engine_version,
        )
        vpp, valuations = self.value_players(players, baselines, computed_at)

        result = ValuationResult(
            league_id=snapshot.league_id,
            season=snapshot.season,
            engine_version=self.settings.engine_version,
            computed_at=computed_at,
            vpp=vpp,
            valuations=tuple(valuations),
            metadata=self._metadata(valuations),
        )
        logger.info(
            "Computed %d valuations for league %s (vpp=%.3f)",
            len(valuations),
            snapshot.league_id,
            vpp,
        )
        return result

    def _metadata(self, valuations: list[Valuation]) -> ValuationMetadata:
        prices = [v.price for v in valuations if v.price > 0]
        if not prices:
            return ValuationMetadata(total_players=len(valuations))
        return ValuationMetadata(
            total_players=len(valuations),
            avg_price=sum(prices) / len(prices),
            price_range=PriceRange(min=min(prices), max=max(prices)),
        )
