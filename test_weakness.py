"""Tests for team weakness analysis."""

import pytest

from fantasy_trade_engine.exceptions import MissingBaselineError, TeamNotFoundError
from fantasy_trade_engine.models import (
    LeagueSnapshot,
    Team,
    Valuation,
    ValuationComponents,
    ValuationResult,
)
from fantasy_trade_engine.services.valuation import ValuationEngine
from fantasy_trade_engine.services.weakness import WeaknessAnalyzer
from fantasy_trade_engine.sources import LeagueContext


@pytest.fixture
def valuations(snapshot, settings, computed_at):
    return ValuationEngine(settings).compute_league(snapshot, computed_at)


@pytest.fixture
def analyzer(context, valuations, settings):
    return WeaknessAnalyzer(context, valuations, settings)


def test_need_scores_are_non_negative(analyzer):
    for profile in analyzer.analyze_league().values():
        assert profile.need_score >= 0
        assert all(item.deficit_points > 0.1 for item in profile.items)
        assert all(item.deficit_value >= 0 for item in profile.items)


def test_need_score_is_sum_of_recorded_deficits(analyzer):
    for profile in analyzer.analyze_league().values():
        assert profile.need_score == pytest.approx(sum(i.deficit_points for i in profile.items))
        assert sum(profile.needs_by_position.values()) == pytest.approx(profile.need_score)


def test_items_are_worst_first(analyzer):
    profile = analyzer.analyze_team("team_c")
    deficits = [item.deficit_points for item in profile.items]
    assert deficits == sorted(deficits, reverse=True)
    assert profile.top_need == profile.items[0].slot


def test_weak_wr_slot_recorded(analyzer):
    profile = analyzer.analyze_team("team_a")
    wr2 = next(item for item in profile.items if item.slot == "WR2")

    # a_wr2 projects 4.0 against a 9.0 baseline
    assert wr2.deficit_points == pytest.approx(5.0)
    assert wr2.deficit_value == pytest.approx(5.0 * analyzer.vpp)
    assert "WR2 below baseline by 5.0 pts" in wr2.drivers
    assert "Low projected output" in wr2.drivers


def test_team_above_baseline_has_no_item_for_slot(analyzer):
    profile = analyzer.analyze_team("team_a")
    assert not any(item.slot in ("QB", "RB1", "RB2") for item in profile.items)


def test_empty_slot_driver(analyzer):
    profile = analyzer.analyze_team("team_c")
    te = next(item for item in profile.items if item.slot == "TE")
    assert te.deficit_points == pytest.approx(7.0)
    assert "No player in TE slot" in te.drivers


def test_bye_and_injury_drivers(analyzer):
    profile = analyzer.analyze_team("team_b")
    qb = next(item for item in profile.items if item.slot == "QB")
    rb1 = next(item for item in profile.items if item.slot == "RB1")

    assert "Injured" in qb.drivers
    assert "Bye week" in rb1.drivers


def test_flex_uses_minimum_eligible_baseline(analyzer):
    # FLEX baseline is min(RB 10, WR 9, TE 7) = 7
    lineup = analyzer.analyze_team("team_b").lineup
    assert lineup.flex_starter is not None
    assert lineup.flex_starter.projected_points >= 7.0
    profile = analyzer.analyze_team("team_b")
    assert all(item.slot != "FLEX" for item in profile.items)


def test_value_per_point_default_without_valuations(context, settings):
    analyzer = WeaknessAnalyzer(context, None, settings)
    assert analyzer.vpp == settings.weakness_vpp_default


def test_value_per_point_from_valuations(analyzer, settings):
    assert analyzer.vpp >= settings.vpp_floor


def _valuation(player_id, position, price, projected, anchor, computed_at):
    return Valuation(
        player_id=player_id,
        player_name=player_id,
        position=position,
        price=price,
        projected_ppg=projected,
        components=ValuationComponents(anchor=anchor, delta_perf=0.0, vorp=0.0),
        computed_at=computed_at,
        engine_version="0.1.0",
    )


def test_value_per_point_blends_anchored_valuations(context, settings, computed_at):
    # Points over baseline: WR 13-9=4, RB 12-10=2, QB 21-16=5
    rows = (
        _valuation("v1", "WR", 20.0, 13.0, 10.0, computed_at),
        _valuation("v2", "RB", 30.0, 12.0, 25.0, computed_at),
        _valuation("v3", "QB", 10.0, 21.0, 8.0, computed_at),
        # No auction anchor, left out of the blend
        _valuation("v4", "RB", 50.0, 20.0, 0.0, computed_at),
    )
    valuations = ValuationResult(
        league_id="league-1",
        season=2024,
        engine_version="0.1.0",
        computed_at=computed_at,
        vpp=1.0,
        valuations=rows,
    )
    analyzer = WeaknessAnalyzer(context, valuations, settings)

    # 0.5 * (60 / 11) + 0.5 * median(5, 15, 2)
    assert analyzer.vpp == pytest.approx(0.5 * 60.0 / 11.0 + 0.5 * 5.0)


def test_deficit_threshold_boundary(baseline_rows, settings, make_player):
    players = {
        "w1": make_player("w1", "WR", 8.9),
        "w2": make_player("w2", "WR", 8.89),
    }
    snapshot = LeagueSnapshot(
        league_id="league-x",
        season=2024,
        teams=(Team(team_id="t1", player_ids=("w1", "w2")),),
        players=players,
        baselines=tuple(baseline_rows),
    )
    profile = WeaknessAnalyzer(LeagueContext(snapshot), None, settings).analyze_team("t1")
    slots = {item.slot: item for item in profile.items}

    assert "WR1" not in slots
    assert slots["WR2"].deficit_points == pytest.approx(0.11)
    assert profile.needs_by_position["WR"] == pytest.approx(0.11)
    assert profile.need_score == pytest.approx(sum(i.deficit_points for i in profile.items))


def test_position_missing_from_baselines_has_no_deficit(snapshot, settings):
    rows = tuple(row for row in snapshot.baselines if row.position.value != "TE")
    context = LeagueContext(snapshot.model_copy(update={"baselines": rows}))
    profile = WeaknessAnalyzer(context, None, settings).analyze_team("team_c")
    assert all(item.slot != "TE" for item in profile.items)


def test_unknown_team(analyzer):
    with pytest.raises(TeamNotFoundError):
        analyzer.analyze_team("team_z")


def test_missing_season_baselines(baseline_rows, settings):
    snapshot = LeagueSnapshot(
        league_id="league-x",
        season=2030,
        teams=(Team(team_id="t1"),),
        baselines=tuple(baseline_rows),
    )
    with pytest.raises(MissingBaselineError):
        WeaknessAnalyzer(LeagueContext(snapshot), None, settings)


def test_empty_roster_needs_every_slot(baseline_rows, settings):
    snapshot = LeagueSnapshot(
        league_id="league-x",
        season=2024,
        teams=(Team(team_id="t1"),),
        baselines=tuple(baseline_rows),
    )
    profile = WeaknessAnalyzer(LeagueContext(snapshot), None, settings).analyze_team("t1")

    # QB 16 + RB 10 x2 + WR 9 x2 + TE 7 + K 7 + D/ST 6 + FLEX 7
    assert profile.need_score == pytest.approx(81.0)
    assert len(profile.items) == 9
    assert all(any(d.startswith("No player") for d in item.drivers) for item in profile.items)


def test_analysis_is_deterministic(context, valuations, settings):
    first = WeaknessAnalyzer(context, valuations, settings).analyze_league()
    second = WeaknessAnalyzer(context, valuations, settings).analyze_league()
    assert {k: v.model_dump_json() for k, v in first.items()} == {
        k: v.model_dump_json() for k, v in second.items()
    }
