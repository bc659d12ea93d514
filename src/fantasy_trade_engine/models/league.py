"""
League-related Pydantic models.
"""

import logging
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fantasy_trade_engine.models.player import Player, Position, PositionBaseline, parse_position

logger = logging.getLogger(__name__)

FLEX_SLOT = "FLEX"

# Standard starting lineup used when league rules are incomplete
STANDARD_LINEUP: dict[str, int] = {
    "QB": 1,
    "RB": 2,
    "WR": 2,
    "TE": 1,
    FLEX_SLOT: 1,
    "K": 1,
    "D/ST": 1,
}

# Rule keys that map to starting slots; BENCH, IR and the like are skipped
LINEUP_KEYS = frozenset([*(p.value for p in Position), FLEX_SLOT])


class LineupRequirements(BaseModel):
    """Starting lineup requirements for a league."""

    model_config = ConfigDict(frozen=True)

    slots: dict[Position, int] = Field(description="Position -> required starters, in fill order")
    flex: int = Field(default=0, ge=0, description="Number of FLEX slots")
    flex_eligible: tuple[Position, ...] = (Position.RB, Position.WR, Position.TE)

    @model_validator(mode="after")
    def check_counts(self) -> "LineupRequirements":
        for position, count in self.slots.items():
            if count < 0:
                raise ValueError(f"Negative starter count for {position.value}")
        return self

    @classmethod
    def standard(cls) -> "LineupRequirements":
        """QB, RB x2, WR x2, TE, FLEX (RB/WR/TE), K, D/ST."""
        return cls.from_mapping(None)

    @classmethod
    def from_mapping(
        cls,
        rules: Mapping[str, int] | None,
        flex_eligible: tuple[Position, ...] | None = None,
    ) -> "LineupRequirements":
        """
        Build requirements from a league rules map merged over the standard lineup.

        Args:
            rules: Mapping like ``{"QB": 1, "RB": 2, "FLEX": 1}``
            flex_eligible: Positions allowed in FLEX (defaults to RB/WR/TE)

        Returns:
            LineupRequirements with FLEX split out from core positions
        """
        merged: dict[str, int] = dict(STANDARD_LINEUP)
        for key, count in (rules or {}).items():
            name = parse_position(key)
            if isinstance(name, Position):
                name = name.value
            if name not in LINEUP_KEYS:
                logger.debug("Ignoring non-lineup roster rule %s", key)
                continue
            merged[name] = int(count)

        flex = merged.pop(FLEX_SLOT, 0)
        slots = {Position(name): count for name, count in merged.items()}

        kwargs = {}
        if flex_eligible is not None:
            kwargs["flex_eligible"] = flex_eligible
        return cls(slots=slots, flex=flex, **kwargs)

    @property
    def total_starters(self) -> int:
        return sum(self.slots.values()) + self.flex


class Team(BaseModel):
    """A fantasy team and its roster membership."""

    model_config = ConfigDict(frozen=True)

    team_id: str
    name: str | None = None
    player_ids: tuple[str, ...] = ()

    @property
    def display_name(self) -> str:
        return self.name or f"Team {self.team_id}"


class LeagueSnapshot(BaseModel):
    """
    Immutable, fully materialized league data for one computation run.

    The engine never mutates a snapshot; persistence and ingestion belong to
    the caller.
    """

    model_config = ConfigDict(frozen=True)

    league_id: str
    season: int
    teams: tuple[Team, ...] = ()
    players: dict[str, Player] = Field(default_factory=dict)
    baselines: tuple[PositionBaseline, ...] = ()
    lineup: LineupRequirements = Field(default_factory=LineupRequirements.standard)
    current_week: int | None = Field(
        default=None, description="Week used for bye-week drivers"
    )

    def rostered_player_ids(self) -> list[str]:
        """Unique rostered player ids in sorted order."""
        ids = {pid for team in self.teams for pid in team.player_ids}
        return sorted(ids)
