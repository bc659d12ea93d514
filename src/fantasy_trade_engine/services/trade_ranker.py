"""
Trade Evaluation and Ranking

Applies three rules to each candidate:

- Trade value: value delta = sum(get prices) - sum(give prices), mirrored
  for the other side
- Acceptability: both sides' projected need score must strictly decrease
  (strict mode also requires both value deltas to be positive)
- Fairness: rank by the larger single-side need improvement, then lower
  aggregate value loss, then the side with the larger pre-trade need, then
  the canonical id signature

Post-trade need is a proportional approximation of net value gained or
lost, capped per trade, not a full roster re-simulation.
"""

from collections.abc import Iterable

from fantasy_trade_engine.config import EngineSettings, get_settings
from fantasy_trade_engine.models.trade import (
    NeedChange,
    NeedDelta,
    SideNeedDelta,
    TradeCandidate,
    TradeItem,
    TradeMode,
    TradePlayer,
    TradeProposal,
    ValueDelta,
)
from fantasy_trade_engine.models.weakness import TeamNeedProfile
from fantasy_trade_engine.utils.rounding import round2

FORMULAS = ["trade_value", "trade_acceptability", "trade_fairness"]


class TradeEvaluator:
    """Scores, filters and ranks trade candidates."""

    def __init__(self, settings: EngineSettings | None = None):
        self.settings = settings or get_settings()

    # ==================== Value ====================

    @staticmethod
    def value_deltas(candidate: TradeCandidate) -> tuple[float, float]:
        """(from side delta, to side delta); exactly negated."""
        give_value = sum(p.value for p in candidate.give)
        get_value = sum(p.value for p in candidate.get)
        return get_value - give_value, give_value - get_value

    # ==================== Acceptability ====================

    def need_change(self, net_gain: float, need_before: float) -> float:
        """
        Approximate change in need score from a trade (negative = improvement).

        Improvement is proportional to net value moved, capped at a fraction
        of the existing need. The side losing value still improves by a
        reduced factor. A team with no need cannot improve.
        """
        if need_before <= 0:
            return 0.0

        ratio = min(abs(net_gain) / need_before, self.settings.max_need_improvement_ratio)
        if net_gain > 0:
            return -ratio * need_before
        return -ratio * need_before * self.settings.value_loss_improvement_factor

    def evaluate(
        self,
        candidate: TradeCandidate,
        need_from: float,
        need_to: float,
    ) -> TradeCandidate:
        """Fill value deltas, need deltas and ranking scores on a candidate."""
        delta_from, delta_to = self.value_deltas(candidate)

        after_from = need_from + self.need_change(delta_from, need_from)
        after_to = need_to + self.need_change(delta_to, need_to)

        fairness = max(need_from - after_from, need_to - after_to)
        value_loss = max(0.0, -delta_from) + max(0.0, -delta_to)
        worst_pre = max(need_from, need_to)

        return candidate.model_copy(
            update={
                "value_delta_from": delta_from,
                "value_delta_to": delta_to,
                "need_from": NeedChange(before=need_from, after=after_from),
                "need_to": NeedChange(before=need_to, after=after_to),
                "fairness_score": fairness,
                "value_loss": value_loss,
                "worst_pre_deficit": worst_pre,
                "tie_break_score": value_loss - 0.1 * worst_pre,
            }
        )

    @staticmethod
    def improves(change: NeedChange | None) -> bool:
        """Strict decrease that survives rounding at the output boundary."""
        return change is not None and round2(change.after) < round2(change.before)

    def is_acceptable(
        self,
        candidate: TradeCandidate,
        mode: TradeMode = TradeMode.BALANCED,
    ) -> bool:
        if not (self.improves(candidate.need_from) and self.improves(candidate.need_to)):
            return False
        if mode == TradeMode.STRICT:
            return candidate.value_delta_from > 0 and candidate.value_delta_to > 0
        return True

    # ==================== Fairness ====================

    @staticmethod
    def sort_key(candidate: TradeCandidate) -> tuple:
        return (
            -candidate.fairness_score,
            candidate.value_loss,
            -candidate.worst_pre_deficit,
            candidate.signature,
            candidate.to_team,
        )

    def rank(self, candidates: Iterable[TradeCandidate]) -> list[TradeCandidate]:
        """Total, deterministic fairness ordering."""
        return sorted(candidates, key=self.sort_key)

    # ==================== Rendering ====================

    def to_proposal(
        self,
        candidate: TradeCandidate,
        rank: int,
        from_profile: TeamNeedProfile | None = None,
        to_profile: TeamNeedProfile | None = None,
    ) -> TradeProposal:
        """Convert a ranked candidate to its external shape."""
        return TradeProposal(
            proposal_id=f"det-{rank}",
            from_team_id=candidate.from_team,
            to_team_id=candidate.to_team,
            give=[self._item(p) for p in candidate.give],
            get=[self._item(p) for p in candidate.get],
            value_delta=ValueDelta(you=candidate.value_delta_from, them=candidate.value_delta_to),
            need_delta=NeedDelta(
                you=SideNeedDelta(
                    by_position=_needs_at(from_profile, candidate.get),
                    before=candidate.need_from.before,
                    after=candidate.need_from.after,
                ),
                them=SideNeedDelta(
                    by_position=_needs_at(to_profile, candidate.give),
                    before=candidate.need_to.before,
                    after=candidate.need_to.after,
                ),
            ),
            fairness_score=candidate.fairness_score,
            rationale=self.rationale(candidate),
        )

    @staticmethod
    def _item(player: TradePlayer) -> TradeItem:
        return TradeItem(
            player_id=player.player_id,
            player_name=player.name,
            position=player.position,
            value=player.value,
        )

    @staticmethod
    def rationale(candidate: TradeCandidate) -> str:
        give_names = " + ".join(p.name for p in candidate.give)
        get_names = " + ".join(p.name for p in candidate.get)
        improvement = candidate.need_from.improvement if candidate.need_from else 0.0
        value_delta = candidate.value_delta_from

        parts = [f"Trade {give_names} for {get_names}."]

        if improvement > 8:
            parts.append(f"Significant roster need improvement (-{improvement:.1f} need score).")
        elif improvement > 3:
            parts.append(f"Moderate need improvement (-{improvement:.1f} need score).")
        else:
            parts.append(f"Marginal need improvement (-{improvement:.1f} need score).")

        if abs(value_delta) < 2:
            parts.append("Balanced value exchange.")
        elif value_delta > 0:
            parts.append(f"Gain ${value_delta:.1f} in value.")
        else:
            parts.append(f"Pay ${abs(value_delta):.1f} premium for roster fit.")

        sends = "/".join(sorted({p.position.value for p in candidate.give}))
        receives = "/".join(sorted({p.position.value for p in candidate.get}))
        parts.append(f"Sends {sends}, receives {receives}.")
        return " ".join(parts)


def _needs_at(profile: TeamNeedProfile | None, incoming: Iterable[TradePlayer]) -> dict[str, float]:
    """Pre-trade deficits at the positions a side receives."""
    if profile is None:
        return {}
    positions = sorted({p.position.value for p in incoming})
    return {
        pos: profile.needs_by_position[pos]
        for pos in positions
        if pos in profile.needs_by_position
    }
