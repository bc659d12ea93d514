"""Shared fixtures: a small deterministic three-team league."""

from datetime import datetime, timezone

import pytest

from fantasy_trade_engine.config import EngineSettings
from fantasy_trade_engine.models import (
    GameLog,
    LeagueSnapshot,
    Player,
    PositionBaseline,
    Projection,
    Team,
)
from fantasy_trade_engine.sources import InMemoryLeagueSource, LeagueContext

SEASON = 2024
COMPUTED_AT = datetime(2024, 10, 1, 12, 0, tzinfo=timezone.utc)

BASELINES = {"QB": 16.0, "RB": 10.0, "WR": 9.0, "TE": 7.0, "K": 7.0, "D/ST": 6.0}


def build_player(
    player_id: str,
    position: str,
    projection: float | None = None,
    price: float | None = None,
    logs: tuple[float, ...] = (),
    **extra,
) -> Player:
    """Player with an optional week-5 projection and logs for weeks 1..n."""
    projections = (Projection(week=5, points=projection),) if projection is not None else ()
    game_logs = tuple(GameLog(week=i + 1, points=pts) for i, pts in enumerate(logs))
    return Player(
        player_id=player_id,
        name=player_id.replace("_", " ").title(),
        position=position,
        auction_price=price,
        projections=projections,
        game_logs=game_logs,
        **extra,
    )


@pytest.fixture
def make_player():
    return build_player


@pytest.fixture
def settings() -> EngineSettings:
    return EngineSettings()


@pytest.fixture
def computed_at() -> datetime:
    return COMPUTED_AT


@pytest.fixture
def baseline_rows() -> list[PositionBaseline]:
    return [
        PositionBaseline(season=SEASON, position=pos, points_per_game=ppg)
        for pos, ppg in BASELINES.items()
    ]


@pytest.fixture
def league_players() -> list[Player]:
    return [
        # Team A: deep at RB, thin at WR
        build_player("a_qb", "QB", 20.0, 30.0, logs=(18.0, 22.0, 24.0, 19.0)),
        build_player("a_rb1", "RB", 15.0, 35.0, logs=(14.0, 17.0)),
        build_player("a_rb2", "RB", 13.0, 22.0),
        build_player("a_rb3", "RB", 11.0, 12.0),
        build_player("a_wr1", "WR", 8.0, 15.0, logs=(6.0, 7.5)),
        build_player("a_wr2", "WR", 4.0, 3.0),
        build_player("a_te", "TE", 8.0, 9.0),
        build_player("a_k", "K", 8.0, 1.0),
        build_player("a_dst", "D-ST", 7.0, 1.0),
        # Team B: loaded at WR, weak QB and RB
        build_player("b_qb", "QB", 13.0, 10.0, injury_status="Questionable"),
        build_player("b_rb1", "RB", 9.0, 14.0, bye_week=6),
        build_player("b_rb2", "RB", 6.0, 4.0),
        build_player("b_wr1", "WR", 16.0, 40.0, logs=(21.0, 15.0, 18.0)),
        build_player("b_wr2", "WR", 14.0, 28.0),
        build_player("b_wr3", "WR", 12.0, 18.0),
        build_player("b_te", "TE", 5.0, 2.0),
        build_player("b_k", "K", 7.5, 1.0),
        build_player("b_dst", "DST", 6.5, 1.0),
        # Team C: sparse data, no TE
        build_player("c_qb", "QB", None, 25.0, logs=(15.0, 12.0)),
        build_player("c_rb1", "RB", 12.0, None),
        build_player("c_rb2", "RB", None, None),
        build_player("c_wr1", "WR", 10.0, 16.0),
        build_player("c_wr2", "WR", 7.0, 6.0),
        build_player("c_k", "K", None, None),
        build_player("c_dst", "D/ST", 5.0, 1.0),
    ]


@pytest.fixture
def snapshot(league_players, baseline_rows) -> LeagueSnapshot:
    teams = []
    for prefix, name in (("a", "Alpha"), ("b", "Bravo"), ("c", "Charlie")):
        ids = tuple(p.player_id for p in league_players if p.player_id.startswith(f"{prefix}_"))
        teams.append(Team(team_id=f"team_{prefix}", name=name, player_ids=ids))
    return LeagueSnapshot(
        league_id="league-1",
        season=SEASON,
        teams=tuple(teams),
        players={p.player_id: p for p in league_players},
        baselines=tuple(baseline_rows),
        current_week=6,
    )


@pytest.fixture
def source(snapshot) -> InMemoryLeagueSource:
    return InMemoryLeagueSource([snapshot])


@pytest.fixture
def context(snapshot) -> LeagueContext:
    return LeagueContext(snapshot)
