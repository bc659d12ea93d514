"""
In-Memory Stores

Reference implementations of the data-store collaborators the engine talks
to. Callers with a real database provide their own.
"""

from threading import RLock

from fantasy_trade_engine.models.league import LeagueSnapshot
from fantasy_trade_engine.models.valuation import ValuationResult


class InMemoryLeagueSource:
    """League snapshots keyed by league id."""

    def __init__(self, leagues: list[LeagueSnapshot] | None = None):
        self._leagues: dict[str, LeagueSnapshot] = {}
        for league in leagues or []:
            self.add(league)

    def add(self, snapshot: LeagueSnapshot) -> None:
        self._leagues[snapshot.league_id] = snapshot

    def get_league(self, league_id: str) -> LeagueSnapshot | None:
        return self._leagues.get(league_id)


class ValuationRepository:
    """
    Stores valuation runs keyed by (league_id, engine_version).

    Saving a run replaces any previous run for the same key, so recomputing
    with the same engine version never duplicates rows.
    """

    def __init__(self):
        self._results: dict[tuple[str, str], ValuationResult] = {}
        self._lock = RLock()

    def save(self, result: ValuationResult) -> None:
        with self._lock:
            self._results[(result.league_id, result.engine_version)] = result

    def latest(self, league_id: str, engine_version: str) -> ValuationResult | None:
        with self._lock:
            return self._results.get((league_id, engine_version))

    def engine_versions(self, league_id: str) -> list[str]:
        with self._lock:
            return sorted(version for lid, version in self._results if lid == league_id)

    def count(self, league_id: str, engine_version: str | None = None) -> int:
        """Number of stored valuation rows for a league (optionally one version)."""
        with self._lock:
            return sum(
                len(result.valuations)
                for (lid, version), result in self._results.items()
                if lid == league_id and (engine_version is None or version == engine_version)
            )
