"""
Trade Engine Pipeline

Runs valuation, weakness analysis and trade generation for a league in one
place, in data-flow order.
"""

import logging
from datetime import datetime

from fantasy_trade_engine.config import EngineSettings, get_settings
from fantasy_trade_engine.models.trade import TradeGenerationResult, TradeMode
from fantasy_trade_engine.models.valuation import ValuationResult
from fantasy_trade_engine.models.weakness import TeamNeedProfile
from fantasy_trade_engine.services.trades import TradeService
from fantasy_trade_engine.services.valuation import ValuationEngine
from fantasy_trade_engine.services.weakness import WeaknessAnalyzer
from fantasy_trade_engine.sources.context import LeagueContext, LeagueSource
from fantasy_trade_engine.sources.memory import ValuationRepository

logger = logging.getLogger(__name__)


class TradeEngine:
    """
    League-scoped entry point for callers.

    Usage:
        engine = TradeEngine.for_league(source, "league-1")
        engine.rebuild_valuations()
        report = engine.team_weakness("team-a")
        result = engine.generate_trades("team-a")
    """

    def __init__(
        self,
        context: LeagueContext,
        settings: EngineSettings | None = None,
        repository: ValuationRepository | None = None,
    ):
        self.ctx = context
        self.settings = settings or get_settings()
        self.repository = repository or ValuationRepository()
        self.valuation_engine = ValuationEngine(self.settings)

    @classmethod
    def for_league(
        cls,
        source: LeagueSource,
        league_id: str,
        settings: EngineSettings | None = None,
        repository: ValuationRepository | None = None,
    ) -> "TradeEngine":
        """Raises LeagueNotFoundError when the source has no such league."""
        return cls(LeagueContext.create(source, league_id), settings, repository)

    def rebuild_valuations(self, computed_at: datetime | None = None) -> ValuationResult:
        """Recompute and store valuations, replacing this engine version's previous run."""
        result = self.valuation_engine.compute_league(self.ctx.snapshot, computed_at)
        self.repository.save(result)
        return result

    def valuations(self) -> ValuationResult:
        """Stored valuations for this engine version, computing them if absent."""
        stored = self.repository.latest(self.ctx.league_id, self.settings.engine_version)
        if stored is None:
            logger.info("No stored valuations for league %s; computing", self.ctx.league_id)
            stored = self.rebuild_valuations()
        return stored

    def weakness_analyzer(self) -> WeaknessAnalyzer:
        return WeaknessAnalyzer(self.ctx, self.valuations(), self.settings)

    def team_weakness(self, team_id: str) -> TeamNeedProfile:
        return self.weakness_analyzer().analyze_team(team_id)

    def league_weakness(self) -> dict[str, TeamNeedProfile]:
        return self.weakness_analyzer().analyze_league()

    def trade_service(self) -> TradeService:
        valuations = self.valuations()
        analyzer = WeaknessAnalyzer(self.ctx, valuations, self.settings)
        return TradeService(self.ctx, valuations, self.settings, analyzer)

    def generate_trades(
        self,
        from_team_id: str,
        to_team_id: str | None = None,
        targets: list[str] | None = None,
        sendables: list[str] | None = None,
        mode: TradeMode = TradeMode.BALANCED,
        top_n: int | None = None,
    ) -> TradeGenerationResult:
        return self.trade_service().generate(
            from_team_id,
            to_team_id=to_team_id,
            targets=targets,
            sendables=sendables,
            mode=mode,
            top_n=top_n,
        )
