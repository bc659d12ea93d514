"""
League Context

Wraps an immutable league snapshot with convenient, validated lookups.
"""

from typing import Protocol

from fantasy_trade_engine.exceptions import LeagueNotFoundError, TeamNotFoundError
from fantasy_trade_engine.models.league import LeagueSnapshot, Team
from fantasy_trade_engine.models.player import Player


class LeagueSource(Protocol):
    """Data-store collaborator that materializes league snapshots."""

    def get_league(self, league_id: str) -> LeagueSnapshot | None: ...


class LeagueContext:
    """
    Helper class to hold league data and provide convenient lookups.

    Team lookups raise TeamNotFoundError; player lookups degrade to None so
    sparse data never aborts a computation.
    """

    def __init__(self, snapshot: LeagueSnapshot):
        self.snapshot = snapshot
        self._team_map: dict[str, Team] = {t.team_id: t for t in snapshot.teams}

    @classmethod
    def create(cls, source: LeagueSource, league_id: str) -> "LeagueContext":
        """
        Factory method to create a LeagueContext from a data source.

        Raises:
            LeagueNotFoundError: The source has no such league
        """
        snapshot = source.get_league(league_id)
        if snapshot is None:
            raise LeagueNotFoundError(league_id)
        return cls(snapshot)

    @property
    def league_id(self) -> str:
        return self.snapshot.league_id

    @property
    def season(self) -> int:
        return self.snapshot.season

    def team_ids(self) -> list[str]:
        """All team ids in sorted order."""
        return sorted(self._team_map)

    def get_team(self, team_id: str) -> Team:
        """Get team by ID, raising if the league has no such team."""
        team = self._team_map.get(team_id)
        if team is None:
            raise TeamNotFoundError(team_id, self.league_id)
        return team

    def get_player(self, player_id: str) -> Player | None:
        return self.snapshot.players.get(player_id)

    def team_players(self, team_id: str) -> list[Player]:
        """Rostered players with known records, sorted by id."""
        team = self.get_team(team_id)
        players = [self.get_player(pid) for pid in sorted(set(team.player_ids))]
        return [p for p in players if p is not None]

    def all_rostered_players(self) -> list[Player]:
        players = [self.get_player(pid) for pid in self.snapshot.rostered_player_ids()]
        return [p for p in players if p is not None]
