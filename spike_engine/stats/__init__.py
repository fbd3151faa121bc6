# stats module
"""
Statistical primitives for spike detection.

- Poisson tail surprise (exact / normal / saddle-point regimes)
- Lazily decayed token frequency dictionary
"""

from spike_engine.stats.surprise import (
    SurpriseRegime,
    EXACT_LAMBDA_LIMIT,
    NORMAL_SIGMA_WIDTH,
    MIN_PROBABILITY,
    surprise_regime,
    neg_ln_poisson_tail,
)
from spike_engine.stats.dictionary import (
    DEFAULT_VACUUM_MIN_SIZE,
    DEFAULT_VACUUM_GROWTH_RATIO,
    DEFAULT_SIGNIFICANCE_FLOOR,
    Dictionary,
    TokenEntry,
    DecayingDictionary,
)

__all__ = [
    # Surprise
    'SurpriseRegime',
    'EXACT_LAMBDA_LIMIT',
    'NORMAL_SIGMA_WIDTH',
    'MIN_PROBABILITY',
    'surprise_regime',
    'neg_ln_poisson_tail',
    # Dictionary
    'DEFAULT_VACUUM_MIN_SIZE',
    'DEFAULT_VACUUM_GROWTH_RATIO',
    'DEFAULT_SIGNIFICANCE_FLOOR',
    'Dictionary',
    'TokenEntry',
    'DecayingDictionary',
]
