"""
Lineup Optimizer

Greedy starting-lineup selection under positional and FLEX rules.

Core positions are filled first, in requirement order, each with the best
remaining player at that exact position. FLEX slots then take the best
remaining eligible player. This single pass is an approximation, not a
global optimum over position/FLEX interactions.
"""

from collections.abc import Sequence

from fantasy_trade_engine.models.league import FLEX_SLOT, LineupRequirements
from fantasy_trade_engine.models.player import Player, Position
from fantasy_trade_engine.models.weakness import Lineup, StarterSlot


def slot_label(base: str, index: int, count: int) -> str:
    """``RB`` for a single slot, ``RB1``/``RB2`` when a position has several."""
    return base if count == 1 else f"{base}{index + 1}"


class LineupOptimizer:
    """Selects starters by projected points."""

    def __init__(self, requirements: LineupRequirements | None = None):
        self.requirements = requirements or LineupRequirements.standard()

    def select(
        self,
        roster: Sequence[tuple[Player, float]],
        week: int | None = None,
    ) -> Lineup:
        """
        Build the starting lineup.

        Args:
            roster: (player, projected points) pairs
            week: Current week for bye detection

        Returns:
            Lineup with ordered starters, the first FLEX starter and the bench
        """
        # Points descending, player id for ties
        order = sorted(range(len(roster)), key=lambda i: (-roster[i][1], roster[i][0].player_id))
        used: set[int] = set()

        def take(eligible: Sequence[Position]) -> int | None:
            for i in order:
                if i not in used and roster[i][0].position in eligible:
                    used.add(i)
                    return i
            return None

        starters: list[StarterSlot] = []
        for position, count in self.requirements.slots.items():
            for k in range(count):
                label = slot_label(position.value, k, count)
                starters.append(
                    self._slot(label, position, roster, take((position,)), week, is_flex=False)
                )

        flex_starter: StarterSlot | None = None
        for k in range(self.requirements.flex):
            label = slot_label(FLEX_SLOT, k, self.requirements.flex)
            slot = self._slot(
                label, None, roster, take(self.requirements.flex_eligible), week, is_flex=True
            )
            if flex_starter is None and not slot.is_empty:
                flex_starter = slot
            starters.append(slot)

        bench = tuple(roster[i][0].player_id for i in order if i not in used)
        return Lineup(starters=tuple(starters), flex_starter=flex_starter, bench=bench)

    @staticmethod
    def _slot(
        label: str,
        position: Position | None,
        roster: Sequence[tuple[Player, float]],
        index: int | None,
        week: int | None,
        is_flex: bool,
    ) -> StarterSlot:
        if index is None:
            return StarterSlot(slot=label, position=position, is_flex=is_flex)

        player, points = roster[index]
        return StarterSlot(
            slot=label,
            position=position,
            player_id=player.player_id,
            player_name=player.display_name,
            player_position=player.position,
            projected_points=points,
            is_bye=player.is_on_bye(week),
            is_injured=player.is_injured(),
            is_flex=is_flex,
        )
