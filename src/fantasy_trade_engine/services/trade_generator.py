"""
Trade Candidate Generator

Lazily enumerates 1:1, 2:1 and 1:2 give/get combinations between two
rosters in deterministic, id-sorted order. Pricing and need scoring happen
later in the evaluator.
"""

from collections.abc import Iterable, Iterator, Sequence
from itertools import combinations
from math import comb

from fantasy_trade_engine.models.trade import TradeCandidate, TradePlayer


def eligible_players(
    players: Iterable[TradePlayer],
    allow_list: Iterable[str] | None = None,
) -> list[TradePlayer]:
    """Filter to an optional allow-list of player ids and sort by id."""
    allowed = set(allow_list) if allow_list is not None else None
    selected = [p for p in players if allowed is None or p.player_id in allowed]
    return sorted(selected, key=lambda p: p.player_id)


def candidate_count(n_give: int, n_get: int) -> int:
    """Number of candidates generated for rosters of the given sizes."""
    return n_give * n_get + comb(n_give, 2) * n_get + n_give * comb(n_get, 2)


def generate_candidates(
    from_team: str,
    to_team: str,
    sendables: Sequence[TradePlayer],
    targets: Sequence[TradePlayer],
) -> Iterator[TradeCandidate]:
    """
    Yield every 1:1, 2:1 and 1:2 candidate.

    Inputs are expected id-sorted (see ``eligible_players``); the yield order
    is all 1:1 pairs, then 2:1, then 1:2.
    """
    for give in sendables:
        for get in targets:
            yield TradeCandidate(from_team=from_team, to_team=to_team, give=(give,), get=(get,))

    for pair in combinations(sendables, 2):
        for get in targets:
            yield TradeCandidate(from_team=from_team, to_team=to_team, give=pair, get=(get,))

    for give in sendables:
        for pair in combinations(targets, 2):
            yield TradeCandidate(from_team=from_team, to_team=to_team, give=(give,), get=pair)


class TradeCandidateGenerator:
    """Enumerates candidates between a source team and one target team."""

    def __init__(
        self,
        sendables: Iterable[str] | None = None,
        targets: Iterable[str] | None = None,
    ):
        self.sendables = list(sendables) if sendables is not None else None
        self.targets = list(targets) if targets is not None else None

    def generate(
        self,
        from_team: str,
        from_players: Iterable[TradePlayer],
        to_team: str,
        to_players: Iterable[TradePlayer],
    ) -> Iterator[TradeCandidate]:
        give_pool = eligible_players(from_players, self.sendables)
        get_pool = eligible_players(to_players, self.targets)
        return generate_candidates(from_team, to_team, give_pool, get_pool)
