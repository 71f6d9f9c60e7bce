"""Configuration for the trending (decay + velocity) engine.

Provides Pydantic settings for the half-life decay, recency bonus,
phase-classification thresholds, and timeline window sizes. All
settings can be overridden via TRENDING_* environment variables.

Instances are frozen. Validation happens at construction time so a bad
value surfaces when the config is built, never halfway through scoring.
Type errors and out-of-range values both raise ConfigurationError.
"""

import math
from typing import Any

from pydantic import Field, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.trending.errors import ConfigurationError

# Half-life used by the legacy preset. Large enough that every weight
# inside a two-week window rounds to 1.0 for practical purposes.
LEGACY_HALF_LIFE_DAYS = 1_000_000.0

# Score ceiling used by the legacy preset so silence alone decides dormancy.
LEGACY_COLD_SCORE_THRESHOLD = 1e12


class DecayConfig(BaseSettings):
    """Tunable parameters for trend scoring and momentum classification.

    Settings can be overridden via environment variables prefixed with
    TRENDING_.

    Example:
        TRENDING_HALF_LIFE_DAYS=5
        TRENDING_HOT_SCORE_THRESHOLD=4.0
    """

    model_config = SettingsConfigDict(
        env_prefix="TRENDING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Decay
    half_life_days: float = Field(
        default=3.0,
        description="Days after which a mention is worth half a mention today",
    )
    recency_bonus_days: int = Field(
        default=3,
        description="Mentions at most this many days old get the bonus multiplier",
    )
    recency_bonus_multiplier: float = Field(
        default=1.5,
        description="Multiplier for mentions inside the recency window (1.0 disables)",
    )

    # Phase thresholds
    hot_score_threshold: float = Field(
        default=3.0,
        description="Minimum trend score for 'hot' (roughly 3+ mentions in 3 days)",
    )
    hot_velocity_threshold: float = Field(
        default=30.0,
        description="Minimum velocity percentage for 'hot'",
    )
    rising_velocity_threshold: float = Field(
        default=15.0,
        description="Minimum velocity percentage for 'rising'",
    )
    cooling_velocity_threshold: float = Field(
        default=-20.0,
        description="Velocity percentage at or below which a subject is 'cooling'",
    )
    min_active_score: float = Field(
        default=0.5,
        description="Trend score below which a quiet subject counts as cooling",
    )
    cold_threshold_days: int = Field(
        default=10,
        description="Days of silence before a low-score subject is 'dormant'",
    )
    cold_score_threshold: float = Field(
        default=0.2,
        description="Trend score below which a silent subject is 'dormant'",
    )

    # Windows
    window_days: int = Field(
        default=14,
        description="Length of the filled (dense) timeline in days",
    )
    active_days: int = Field(
        default=7,
        description="A subject mentioned within this many days is 'active'",
    )
    trend_direction_threshold: float = Field(
        default=20.0,
        description="Velocity above +threshold is 'up', below -threshold is 'down'",
    )

    def __init__(self, **values: Any) -> None:
        try:
            super().__init__(**values)
        except PydanticValidationError as e:
            error = e.errors()[0]
            loc = error.get("loc") or ()
            field_name = str(loc[0]) if loc else None
            raise ConfigurationError(
                f"Invalid value for {field_name}: {error['msg']}",
                field_name=field_name,
            ) from e

    @model_validator(mode="after")
    def check_values(self) -> "DecayConfig":
        for name, value in self:
            if isinstance(value, float) and not math.isfinite(value):
                raise ConfigurationError(
                    f"{name} must be a finite number, got {value!r}",
                    field_name=name,
                )

        if self.half_life_days <= 0:
            raise ConfigurationError(
                f"half_life_days must be > 0, got {self.half_life_days}",
                field_name="half_life_days",
            )
        if self.recency_bonus_days < 0:
            raise ConfigurationError(
                f"recency_bonus_days must be >= 0, got {self.recency_bonus_days}",
                field_name="recency_bonus_days",
            )
        if self.recency_bonus_multiplier < 1.0:
            raise ConfigurationError(
                "recency_bonus_multiplier must be >= 1.0, "
                f"got {self.recency_bonus_multiplier}",
                field_name="recency_bonus_multiplier",
            )
        if self.window_days < 1:
            raise ConfigurationError(
                f"window_days must be >= 1, got {self.window_days}",
                field_name="window_days",
            )
        return self

    @classmethod
    def legacy(cls) -> "DecayConfig":
        """Preset reproducing the simple percentage-change momentum scheme.

        Near-uniform weighting turns the velocity into a plain
        recent-vs-previous count comparison, the recency bonus is off,
        and dormancy depends on days of silence only.
        """
        return cls(
            half_life_days=LEGACY_HALF_LIFE_DAYS,
            recency_bonus_days=2,
            recency_bonus_multiplier=1.0,
            hot_score_threshold=3.0,
            hot_velocity_threshold=50.0,
            rising_velocity_threshold=20.0,
            cooling_velocity_threshold=-30.0,
            min_active_score=0.0,
            cold_threshold_days=7,
            cold_score_threshold=LEGACY_COLD_SCORE_THRESHOLD,
        )
