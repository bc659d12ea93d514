"""
Trade-related Pydantic models.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from fantasy_trade_engine.models.player import Position
from fantasy_trade_engine.utils.rounding import Rounded


class TradeMode(str, Enum):
    """Acceptance mode for generated trades."""

    BALANCED = "balanced"
    STRICT = "strict"


class TradePlayer(BaseModel):
    """A tradeable player with its current price."""

    model_config = ConfigDict(frozen=True)

    player_id: str
    name: str
    position: Position
    value: Rounded = 0.0
    team_id: str


class NeedChange(BaseModel):
    """Need score before and after a trade for one side."""

    model_config = ConfigDict(frozen=True)

    before: float
    after: float

    @property
    def improvement(self) -> float:
        return self.before - self.after


class TradeCandidate(BaseModel):
    """
    A structurally distinct give/get combination between two teams.

    Generated with only the player lists; the evaluator fills in the value
    and need deltas and ranking scores.
    """

    model_config = ConfigDict(frozen=True)

    from_team: str
    to_team: str
    give: tuple[TradePlayer, ...]
    get: tuple[TradePlayer, ...]
    value_delta_from: float = 0.0
    value_delta_to: float = 0.0
    need_from: NeedChange | None = None
    need_to: NeedChange | None = None
    fairness_score: float = 0.0
    tie_break_score: float = 0.0
    value_loss: float = 0.0
    worst_pre_deficit: float = 0.0

    @property
    def signature(self) -> str:
        """Canonical id signature, e.g. ``rb1:wr1|wr9``."""
        give_ids = ":".join(sorted(p.player_id for p in self.give))
        get_ids = ":".join(sorted(p.player_id for p in self.get))
        return f"{give_ids}|{get_ids}"

    @property
    def shape(self) -> str:
        return f"{len(self.give)}:{len(self.get)}"


class TradeItem(BaseModel):
    """A player in a rendered trade proposal."""

    player_id: str
    player_name: str
    position: Position
    value: Rounded


class ValueDelta(BaseModel):
    you: Rounded
    them: Rounded


class SideNeedDelta(BaseModel):
    by_position: dict[str, Rounded] = Field(default_factory=dict)
    before: Rounded
    after: Rounded


class NeedDelta(BaseModel):
    you: SideNeedDelta
    them: SideNeedDelta


class TradeProposal(BaseModel):
    """A ranked trade candidate in its external shape."""

    proposal_id: str = Field(description="Rank-derived label, e.g. det-1")
    from_team_id: str
    to_team_id: str
    give: list[TradeItem]
    get: list[TradeItem]
    value_delta: ValueDelta
    need_delta: NeedDelta
    fairness_score: Rounded
    rationale: str


class TradeGenerationMeta(BaseModel):
    """Run-level facts about a trade generation request."""

    total_candidates: int
    filtered_candidates: int
    mode: TradeMode
    from_team_id: str
    target_team_ids: list[str]
    engine_version: str
    formulas_applied: list[str] = Field(default_factory=list)


class TradeGenerationResult(BaseModel):
    """Ranked proposals plus run metadata."""

    proposals: list[TradeProposal] = Field(default_factory=list)
    meta: TradeGenerationMeta
