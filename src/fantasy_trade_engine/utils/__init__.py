"""Shared helpers."""

from fantasy_trade_engine.utils.rounding import Rounded, round2

__all__ = ["Rounded", "round2"]
