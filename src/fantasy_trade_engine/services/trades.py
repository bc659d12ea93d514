"""
Trade Generation Service

Finds win-win trades for a team against one or all other teams in its
league, using current valuations and team need profiles.
"""

import asyncio
import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from itertools import islice

from fantasy_trade_engine.config import EngineSettings, get_settings
from fantasy_trade_engine.exceptions import TeamNotFoundError
from fantasy_trade_engine.models.trade import (
    TradeCandidate,
    TradeGenerationMeta,
    TradeGenerationResult,
    TradeMode,
    TradePlayer,
)
from fantasy_trade_engine.models.valuation import ValuationResult
from fantasy_trade_engine.models.weakness import TeamNeedProfile
from fantasy_trade_engine.services.trade_generator import TradeCandidateGenerator
from fantasy_trade_engine.services.trade_ranker import FORMULAS, TradeEvaluator
from fantasy_trade_engine.services.weakness import WeaknessAnalyzer
from fantasy_trade_engine.sources.context import LeagueContext

logger = logging.getLogger(__name__)


class TradeService:
    """
    Service for generating and ranking trade proposals.

    Each target team is evaluated independently from an immutable snapshot,
    so targets can be processed in parallel; the merged list is always
    re-sorted with the full fairness tie-break chain.
    """

    def __init__(
        self,
        context: LeagueContext,
        valuations: ValuationResult,
        settings: EngineSettings | None = None,
        analyzer: WeaknessAnalyzer | None = None,
    ):
        self.ctx = context
        self.settings = settings or get_settings()
        self.valuations = valuations
        self.analyzer = analyzer or WeaknessAnalyzer(context, valuations, self.settings)
        self.evaluator = TradeEvaluator(self.settings)
        self._prices = valuations.price_map()

    def trade_players(self, team_id: str) -> list[TradePlayer]:
        """Priced players on a team; unvalued players are worth 0."""
        return [
            TradePlayer(
                player_id=player.player_id,
                name=player.display_name,
                position=player.position,
                value=self._prices.get(player.player_id, 0.0),
                team_id=team_id,
            )
            for player in self.ctx.team_players(team_id)
        ]

    def _target_team_ids(self, from_team_id: str, to_team_id: str | None) -> list[str]:
        self.ctx.get_team(from_team_id)
        targets = [tid for tid in self.ctx.team_ids() if tid != from_team_id]
        if to_team_id is not None:
            if to_team_id not in targets:
                raise TeamNotFoundError(to_team_id, self.ctx.league_id)
            targets = [to_team_id]
        return targets

    def _evaluate_target(
        self,
        from_team_id: str,
        from_players: list[TradePlayer],
        from_need: float,
        target_id: str,
        target_need: float,
        generator: TradeCandidateGenerator,
        mode: TradeMode,
    ) -> tuple[int, list[TradeCandidate]]:
        """Evaluate all candidates against one target team."""
        candidates: Iterable[TradeCandidate] = generator.generate(
            from_team_id, from_players, target_id, self.trade_players(target_id)
        )
        if self.settings.max_candidates is not None:
            candidates = islice(candidates, self.settings.max_candidates)

        total = 0
        accepted: list[TradeCandidate] = []
        for candidate in candidates:
            total += 1
            evaluated = self.evaluator.evaluate(candidate, from_need, target_need)
            if self.evaluator.is_acceptable(evaluated, mode):
                accepted.append(evaluated)

        logger.debug(
            "Target %s: %d candidates, %d acceptable", target_id, total, len(accepted)
        )
        return total, accepted

    def _prepare(
        self,
        from_team_id: str,
        to_team_id: str | None,
    ) -> tuple[list[str], dict[str, TeamNeedProfile]]:
        target_ids = self._target_team_ids(from_team_id, to_team_id)
        profiles = {
            team_id: self.analyzer.analyze_team(team_id)
            for team_id in [from_team_id, *target_ids]
        }
        logger.debug(
            "From team %s need %.2f; targets: %s",
            from_team_id,
            profiles[from_team_id].need_score,
            ", ".join(f"{tid}({profiles[tid].need_score:.2f})" for tid in target_ids),
        )
        return target_ids, profiles

    def _finalize(
        self,
        from_team_id: str,
        target_ids: list[str],
        profiles: dict[str, TeamNeedProfile],
        results: list[tuple[int, list[TradeCandidate]]],
        mode: TradeMode,
        top_n: int | None,
    ) -> TradeGenerationResult:
        total = sum(count for count, _ in results)
        accepted = [c for _, batch in results for c in batch]
        ranked = self.evaluator.rank(accepted)

        limit = self.settings.top_n_proposals if top_n is None else top_n
        proposals = [
            self.evaluator.to_proposal(
                candidate, rank, profiles[candidate.from_team], profiles[candidate.to_team]
            )
            for rank, candidate in enumerate(ranked[:limit], start=1)
        ]

        logger.info(
            "Generated %d candidates for team %s, %d acceptable, returning %d (%s mode)",
            total,
            from_team_id,
            len(accepted),
            len(proposals),
            mode.value,
        )
        return TradeGenerationResult(
            proposals=proposals,
            meta=TradeGenerationMeta(
                total_candidates=total,
                filtered_candidates=len(accepted),
                mode=mode,
                from_team_id=from_team_id,
                target_team_ids=target_ids,
                engine_version=self.settings.engine_version,
                formulas_applied=list(FORMULAS),
            ),
        )

    def generate(
        self,
        from_team_id: str,
        to_team_id: str | None = None,
        targets: Iterable[str] | None = None,
        sendables: Iterable[str] | None = None,
        mode: TradeMode = TradeMode.BALANCED,
        top_n: int | None = None,
    ) -> TradeGenerationResult:
        """
        Generate ranked win-win trade proposals.

        Args:
            from_team_id: Team proposing the trade
            to_team_id: Restrict to one partner team (default: all others)
            targets: Allow-list of partner player ids to ask for
            sendables: Allow-list of own player ids to offer
            mode: balanced (need only) or strict (need and value)
            top_n: Number of proposals to return

        Returns:
            TradeGenerationResult with ranked proposals and run metadata

        Raises:
            TeamNotFoundError: Unknown source or target team
        """
        mode = TradeMode(mode)
        target_ids, profiles = self._prepare(from_team_id, to_team_id)
        generator = TradeCandidateGenerator(sendables=sendables, targets=targets)
        from_players = self.trade_players(from_team_id)
        from_need = profiles[from_team_id].need_score

        def run(target_id: str) -> tuple[int, list[TradeCandidate]]:
            return self._evaluate_target(
                from_team_id,
                from_players,
                from_need,
                target_id,
                profiles[target_id].need_score,
                generator,
                mode,
            )

        if len(target_ids) > 1 and self.settings.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.settings.max_workers) as pool:
                results = list(pool.map(run, target_ids))
        else:
            results = [run(target_id) for target_id in target_ids]

        return self._finalize(from_team_id, target_ids, profiles, results, mode, top_n)

    async def generate_async(
        self,
        from_team_id: str,
        to_team_id: str | None = None,
        targets: Iterable[str] | None = None,
        sendables: Iterable[str] | None = None,
        mode: TradeMode = TradeMode.BALANCED,
        top_n: int | None = None,
    ) -> TradeGenerationResult:
        """Async variant of ``generate``; targets are evaluated concurrently."""
        mode = TradeMode(mode)
        target_ids, profiles = self._prepare(from_team_id, to_team_id)
        generator = TradeCandidateGenerator(sendables=sendables, targets=targets)
        from_players = self.trade_players(from_team_id)
        from_need = profiles[from_team_id].need_score

        tasks = [
            asyncio.to_thread(
                self._evaluate_target,
                from_team_id,
                from_players,
                from_need,
                target_id,
                profiles[target_id].need_score,
                generator,
                mode,
            )
            for target_id in target_ids
        ]
        results = await asyncio.gather(*tasks)
        return self._finalize(from_team_id, target_ids, profiles, list(results), mode, top_n)
