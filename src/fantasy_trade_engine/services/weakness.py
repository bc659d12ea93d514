"""
Team Weakness Analysis Service

Scores roster need by comparing each greedy starter with the replacement
baseline for its slot.
"""

import logging

from fantasy_trade_engine.config import EngineSettings, get_settings
from fantasy_trade_engine.models.player import Player
from fantasy_trade_engine.models.valuation import ValuationResult
from fantasy_trade_engine.models.weakness import StarterSlot, TeamNeedProfile, WeaknessItem
from fantasy_trade_engine.services.baselines import BaselineProvider
from fantasy_trade_engine.services.calibration import blend_value_per_point, vorp_points
from fantasy_trade_engine.services.lineup import LineupOptimizer
from fantasy_trade_engine.services.valuation import ValuationEngine, position_projection_means
from fantasy_trade_engine.sources.context import LeagueContext

logger = logging.getLogger(__name__)


class WeaknessAnalyzer:
    """
    Service for team need analysis.

    Analyzes each team from multiple angles:
    - Greedy starting lineup under league lineup rules
    - Per-slot deficit against replacement baselines
    - Dollar cost of each deficit using the league's value per point
    - Human-readable drivers (empty slot, bye, injury, low output)
    """

    def __init__(
        self,
        context: LeagueContext,
        valuations: ValuationResult | None = None,
        settings: EngineSettings | None = None,
    ):
        self.ctx = context
        self.settings = settings or get_settings()
        self.baselines = BaselineProvider(
            context.snapshot.baselines, self.settings.default_replacement_ppg
        ).for_season(context.season)
        self.optimizer = LineupOptimizer(context.snapshot.lineup)
        self.engine = ValuationEngine(self.settings)
        self._position_means = position_projection_means(context.all_rostered_players())
        self.vpp = self._value_per_point(valuations)

    def _value_per_point(self, valuations: ValuationResult | None) -> float:
        """Recalibrate vpp from current league valuations with a nonzero anchor."""
        samples = []
        if valuations is not None:
            for valuation in sorted(valuations.valuations, key=lambda v: v.player_id):
                if valuation.components.anchor == 0:
                    continue
                baseline = self.baselines.get(valuation.position)
                points = vorp_points(
                    valuation.projected_ppg, baseline, self.settings.vorp_epsilon
                )
                samples.append((valuation.price, points))

        return blend_value_per_point(
            samples,
            floor=self.settings.vpp_floor,
            default=self.settings.weakness_vpp_default,
            blend_weight=self.settings.vpp_blend_weight,
        )

    def projected_points(self, player: Player) -> float:
        """Projected points for lineup selection, never negative."""
        return max(0.0, self.engine.projected_ppg(player, self.baselines, self._position_means))

    def analyze_team(self, team_id: str) -> TeamNeedProfile:
        """
        Analyze a team's roster needs.

        Args:
            team_id: Team to analyze

        Returns:
            TeamNeedProfile with worst-first weakness items

        Raises:
            TeamNotFoundError: The league has no such team
        """
        team = self.ctx.get_team(team_id)
        roster = [
            (player, self.projected_points(player)) for player in self.ctx.team_players(team_id)
        ]
        lineup = self.optimizer.select(roster, week=self.ctx.snapshot.current_week)

        items: list[WeaknessItem] = []
        need_score = 0.0
        needs_by_position: dict[str, float] = {}

        for slot in lineup.starters:
            if slot.is_flex:
                baseline = self.baselines.flex_baseline(self.optimizer.requirements.flex_eligible)
            else:
                baseline = self.baselines.lookup(slot.position)
            if baseline is None:
                continue

            deficit = max(0.0, baseline - slot.projected_points)
            if deficit <= self.settings.deficit_threshold:
                continue

            key = "FLEX" if slot.is_flex else slot.position.value
            items.append(
                WeaknessItem(
                    slot=slot.slot,
                    position=slot.position,
                    deficit_points=deficit,
                    deficit_value=self.vpp * deficit,
                    drivers=tuple(self.build_drivers(slot, deficit)),
                )
            )
            need_score += deficit
            needs_by_position[key] = needs_by_position.get(key, 0.0) + deficit

        # Worst first
        items.sort(key=lambda item: (-item.deficit_points, item.slot))

        logger.debug("Team %s need score %.2f (%d weak slots)", team_id, need_score, len(items))
        return TeamNeedProfile(
            team_id=team_id,
            team_name=team.display_name,
            need_score=need_score,
            items=tuple(items),
            needs_by_position=needs_by_position,
            vpp=self.vpp,
            lineup=lineup,
        )

    def analyze_league(self) -> dict[str, TeamNeedProfile]:
        """Need profiles for every team, keyed by team id."""
        return {team_id: self.analyze_team(team_id) for team_id in self.ctx.team_ids()}

    def build_drivers(self, slot: StarterSlot, deficit: float) -> list[str]:
        """Independent, additive explanations for a slot deficit."""
        drivers: list[str] = []

        if slot.is_empty:
            drivers.append(f"No player in {slot.slot} slot")

        drivers.append(f"{slot.slot} below baseline by {deficit:.1f} pts")

        if slot.is_bye:
            drivers.append("Bye week")

        if slot.is_injured:
            drivers.append("Injured")

        if not slot.is_empty and slot.projected_points < self.settings.low_output_threshold:
            drivers.append("Low projected output")

        return drivers
