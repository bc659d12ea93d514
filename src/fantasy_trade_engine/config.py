"""
Configuration module using pydantic-settings.

Loads engine knobs from environment variables with sensible defaults.
Services receive an EngineSettings instance explicitly so that several
engine versions can run side by side.
"""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Trade engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TRADE_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Versioning
    engine_version: str = "0.1.0"

    # Value-per-point calibration
    vorp_epsilon: float = Field(default=0.1, gt=0)
    vpp_floor: float = Field(default=1.0, gt=0)
    vpp_default: float = Field(default=1.0, gt=0)
    weakness_vpp_default: float = Field(default=2.0, gt=0)
    vpp_blend_weight: float = Field(default=0.5, ge=0, le=1)

    # Valuation components
    min_price: float = Field(default=0.50, gt=0)
    ema_half_life_weeks: float = Field(default=3.0, gt=0)
    perf_horizon_weeks: float = 3.0
    vorp_horizon_weeks: float = 1.0
    weight_anchor: float = Field(default=0.45, ge=0)
    weight_perf: float = Field(default=0.20, ge=0)
    weight_vorp: float = Field(default=0.25, ge=0)
    weight_global: float = Field(default=0.10, ge=0)

    # Projection fallback chain
    trailing_window: int = Field(default=4, ge=1)
    trailing_weight: float = 0.6
    position_mean_weight: float = 0.4
    default_replacement_ppg: float = 8.0  # position missing from a baseline set

    # Weakness analysis
    deficit_threshold: float = 0.1
    low_output_threshold: float = 5.0

    # Trade evaluation
    max_need_improvement_ratio: float = Field(default=0.5, gt=0, le=1)
    value_loss_improvement_factor: float = Field(default=0.5, ge=0, le=1)
    top_n_proposals: int = Field(default=5, ge=1)
    max_candidates: int | None = Field(default=None, ge=1)
    max_workers: int = Field(default=4, ge=1)

    @property
    def ema_alpha(self) -> float:
        """Smoothing factor whose half-life is ``ema_half_life_weeks``."""
        return 1.0 - 2.0 ** (-1.0 / self.ema_half_life_weeks)

    @model_validator(mode="after")
    def check_weights(self) -> "EngineSettings":
        total = self.weight_anchor + self.weight_perf + self.weight_vorp + self.weight_global
        if total <= 0:
            raise ValueError("At least one valuation component weight must be positive")
        return self


@lru_cache
def get_settings() -> EngineSettings:
    """Get cached settings instance."""
    return EngineSettings()
