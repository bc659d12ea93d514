"""End-to-end tests for the league pipeline and its stores."""

import pytest

from fantasy_trade_engine import (
    EngineSettings,
    LeagueNotFoundError,
    MissingBaselineError,
    TeamNotFoundError,
    TradeEngine,
)
from fantasy_trade_engine.models import LeagueSnapshot, Team
from fantasy_trade_engine.sources import InMemoryLeagueSource, ValuationRepository


@pytest.fixture
def engine(source, settings):
    return TradeEngine.for_league(source, "league-1", settings)


def test_unknown_league(source):
    with pytest.raises(LeagueNotFoundError) as exc:
        TradeEngine.for_league(source, "league-404")
    assert exc.value.league_id == "league-404"


def test_valuations_computed_on_demand(engine):
    assert engine.repository.latest("league-1", engine.settings.engine_version) is None
    result = engine.valuations()
    assert engine.repository.latest("league-1", engine.settings.engine_version) is result
    assert result.get("a_qb").player_name == "A Qb"
    assert result.get("nobody") is None


def test_rebuild_replaces_previous_run(engine, computed_at, snapshot):
    engine.rebuild_valuations(computed_at)
    rows = engine.repository.count("league-1")
    engine.rebuild_valuations(computed_at)

    assert rows == len(snapshot.rostered_player_ids())
    assert engine.repository.count("league-1") == rows


def test_engine_versions_coexist(source, computed_at):
    repository = ValuationRepository()
    v1 = TradeEngine.for_league(source, "league-1", EngineSettings(engine_version="1.0"), repository)
    v2 = TradeEngine.for_league(source, "league-1", EngineSettings(engine_version="2.0"), repository)
    v1.rebuild_valuations(computed_at)
    v2.rebuild_valuations(computed_at)

    assert repository.engine_versions("league-1") == ["1.0", "2.0"]
    assert repository.count("league-1", "1.0") == repository.count("league-1", "2.0")
    assert repository.count("league-1") == 2 * repository.count("league-1", "1.0")
    assert {v.engine_version for v in repository.latest("league-1", "2.0").valuations} == {"2.0"}


def test_weakness_reports(engine):
    league = engine.league_weakness()
    assert sorted(league) == ["team_a", "team_b", "team_c"]
    assert engine.team_weakness("team_c").need_score == league["team_c"].need_score

    with pytest.raises(TeamNotFoundError):
        engine.team_weakness("team_z")


def test_generate_trades_end_to_end(engine, computed_at):
    engine.rebuild_valuations(computed_at)
    result = engine.generate_trades("team_a", mode="balanced", top_n=3)

    assert 0 < len(result.proposals) <= 3
    assert result.meta.engine_version == engine.settings.engine_version

    payload = result.model_dump(by_alias=True)
    first = payload["proposals"][0]
    assert set(first) == {
        "proposal_id",
        "from_team_id",
        "to_team_id",
        "give",
        "get",
        "value_delta",
        "need_delta",
        "fairness_score",
        "rationale",
    }
    assert set(first["need_delta"]["you"]) == {"by_position", "before", "after"}


def test_missing_season_baselines(baseline_rows, settings):
    snapshot = LeagueSnapshot(
        league_id="league-2031",
        season=2031,
        teams=(Team(team_id="t1"),),
        baselines=tuple(baseline_rows),
    )
    engine = TradeEngine.for_league(InMemoryLeagueSource([snapshot]), "league-2031", settings)

    with pytest.raises(MissingBaselineError) as exc:
        engine.rebuild_valuations()
    assert exc.value.season == 2031
