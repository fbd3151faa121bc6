# spike_engine/config.py
"""
Detector configuration.

All parameters are fixed at construction time. ``DetectorConfig`` validates
eagerly so an invalid detector can never be built.

Environment variables (read by ``DetectorConfig.from_env``, ``.env``
supported through python-dotenv):

    SPIKE_SHORT_HORIZON     short horizon S (window size)
    SPIKE_LONG_HORIZON      long horizon L (decay half-life scale)
    SPIKE_START_THRESHOLD   surprise needed to enter a spike
    SPIKE_END_THRESHOLD     surprise below which a spike ends
    SPIKE_NGRAM_MIN         smallest character n-gram
    SPIKE_NGRAM_MAX         largest character n-gram
    SPIKE_PREFER_RECENT     summary ties go to the most recent chat (true/false)
"""

from __future__ import annotations

import math
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_SHORT_HORIZON = 30
DEFAULT_LONG_HORIZON = 100
DEFAULT_START_THRESHOLD = 2.5
DEFAULT_END_THRESHOLD = 1.25
DEFAULT_NGRAM_RANGE = (1, 4)
DEFAULT_PREFER_RECENT = True

ENV_PREFIX = "SPIKE_"

_ENV_FIELDS = {
    "SHORT_HORIZON": "short_horizon",
    "LONG_HORIZON": "long_horizon",
    "START_THRESHOLD": "start_threshold",
    "END_THRESHOLD": "end_threshold",
    "NGRAM_MIN": "ngram_min",
    "NGRAM_MAX": "ngram_max",
    "PREFER_RECENT": "prefer_recent",
}


class DetectorConfig(BaseModel):
    """
    Construction-time parameters shared by the burst detector and the
    summarization window.

    Attributes:
        short_horizon: S, window capacity and short decay horizon
        long_horizon: L, long decay horizon
        start_threshold: Idle -> InSpike when surprise exceeds this
        end_threshold: InSpike -> Idle when surprise drops below this
        ngram_min: Smallest character n-gram
        ngram_max: Largest character n-gram
        check_hysteresis: Require start_threshold > end_threshold. Turn off
            only for test setups such as (0.0, inf)
        prefer_recent: Summary ties go to the most recent window member
    """

    model_config = ConfigDict(frozen=True)

    short_horizon: int = Field(DEFAULT_SHORT_HORIZON, ge=1)
    long_horizon: int = Field(DEFAULT_LONG_HORIZON, ge=1)
    start_threshold: float = DEFAULT_START_THRESHOLD
    end_threshold: float = Field(DEFAULT_END_THRESHOLD, ge=0.0)
    ngram_min: int = Field(DEFAULT_NGRAM_RANGE[0], ge=1)
    ngram_max: int = Field(DEFAULT_NGRAM_RANGE[1], ge=1)
    check_hysteresis: bool = True
    prefer_recent: bool = DEFAULT_PREFER_RECENT

    @model_validator(mode="after")
    def _check_ranges(self) -> "DetectorConfig":
        if math.isnan(self.start_threshold) or math.isnan(self.end_threshold):
            raise ValueError("thresholds must not be NaN")
        if self.ngram_max < self.ngram_min:
            raise ValueError(
                f"ngram_max ({self.ngram_max}) must be >= ngram_min ({self.ngram_min})"
            )
        if self.check_hysteresis and self.start_threshold <= self.end_threshold:
            raise ValueError(
                f"start_threshold ({self.start_threshold}) must be greater than "
                f"end_threshold ({self.end_threshold})"
            )
        return self

    @property
    def thresholds(self) -> Tuple[float, float]:
        return self.start_threshold, self.end_threshold

    @property
    def ngram_range(self) -> Tuple[int, int]:
        return self.ngram_min, self.ngram_max

    @classmethod
    def from_env(
        cls,
        prefix: str = ENV_PREFIX,
        env_file: Optional[Path] = None,
        **overrides: Any,
    ) -> "DetectorConfig":
        """
        Build a config from ``{prefix}*`` environment variables.

        Args:
            prefix: Environment variable prefix (default: "SPIKE_")
            env_file: Optional .env file loaded before reading the environment
            **overrides: Explicit values that win over the environment
        """
        if env_file is not None:
            load_dotenv(env_file)
        else:
            load_dotenv()

        values: Dict[str, Any] = {}
        for suffix, field in _ENV_FIELDS.items():
            raw = os.getenv(prefix + suffix)
            if raw is not None and raw.strip():
                values[field] = raw.strip()
        values.update(overrides)
        return cls(**values)


__all__ = [
    'DEFAULT_SHORT_HORIZON',
    'DEFAULT_LONG_HORIZON',
    'DEFAULT_START_THRESHOLD',
    'DEFAULT_END_THRESHOLD',
    'DEFAULT_NGRAM_RANGE',
    'DEFAULT_PREFER_RECENT',
    'ENV_PREFIX',
    'DetectorConfig',
]
