"""
Engine exceptions.

Only configuration problems are raised. Missing per-player data is always
absorbed by the valuation and weakness fallbacks.
"""


class TradeEngineError(Exception):
    """Base exception for the trade engine."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ConfigurationError(TradeEngineError):
    """A caller supplied an incomplete league configuration."""


class MissingBaselineError(ConfigurationError):
    """No replacement baselines exist for the requested season."""

    def __init__(self, season: int):
        self.season = season
        super().__init__(f"No replacement baselines found for season {season}")


class LeagueNotFoundError(ConfigurationError):
    """League lookup failed."""

    def __init__(self, league_id: str):
        self.league_id = league_id
        super().__init__(f"League {league_id} not found")


class TeamNotFoundError(ConfigurationError):
    """Team lookup failed within a league."""

    def __init__(self, team_id: str, league_id: str):
        self.team_id = team_id
        self.league_id = league_id
        super().__init__(f"Team {team_id} not found in league {league_id}")
