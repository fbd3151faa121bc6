# spike_engine/stats/surprise.py
"""
Poisson tail surprise.

``neg_ln_poisson_tail(k, lam)`` scores how unlikely it is to see at least
``k`` events when ``lam`` are expected, as ``-ln`` of the Poisson upper
tail. Three regimes are used:

- exact:  lam < 20, survival function from scipy
- normal: bulk of the distribution, normal approximation with continuity
          correction
- saddle: far upper tail, Lugannani-Rice style saddle-point expansion

Example:
    ```python
    from spike_engine.stats import neg_ln_poisson_tail

    neg_ln_poisson_tail(30, 10.0)   # far above the expected rate: large
    neg_ln_poisson_tail(5, 7.3)     # below the expected rate: close to 0
    ```
"""

from __future__ import annotations

import math
from typing import Literal

from scipy.stats import poisson

SurpriseRegime = Literal["exact", "normal", "saddle"]

EXACT_LAMBDA_LIMIT = 20.0
NORMAL_SIGMA_WIDTH = 4.0
MIN_PROBABILITY = 1e-308

_MAX_SURPRISE = -math.log(MIN_PROBABILITY)


def _neg_ln(p: float) -> float:
    return -math.log(max(p, MIN_PROBABILITY))


def surprise_regime(k: float, lam: float) -> SurpriseRegime:
    """Which approximation ``neg_ln_poisson_tail`` uses for (k, lam)."""
    if lam < EXACT_LAMBDA_LIMIT:
        return "exact"
    if k < lam or abs(k - lam) <= NORMAL_SIGMA_WIDTH * math.sqrt(lam):
        return "normal"
    return "saddle"


def _exact(k: float, lam: float) -> float:
    # sf(ceil(k)) = P(X > ceil(k)), the quantity the +0.5 correction below approximates
    return _neg_ln(float(poisson.sf(float(math.ceil(k)), lam)))


def _normal(k: float, lam: float) -> float:
    z = (k - lam + 0.5) / math.sqrt(lam)
    return _neg_ln(0.5 * math.erfc(z / math.sqrt(2.0)))


def _saddle(k: float, lam: float) -> float:
    s = k / lam
    rate = s - 1.0 - math.log(s)
    t = math.sqrt(2.0 * lam * rate)
    w = t + (1.0 / s - 1.0) / t
    if not w > 0.0:
        return _normal(k, lam)
    ln_sf = -lam * rate - math.log(w) - 0.5 * math.log(2.0 * math.pi * k)
    return -ln_sf


def neg_ln_poisson_tail(k: float, lam: float) -> float:
    """
    Negative log tail probability of a Poisson(lam) count reaching k.

    Args:
        k: Observed count (>= 0)
        lam: Expected count under the null hypothesis

    Returns:
        Surprise score in [0, -ln(MIN_PROBABILITY)]. Non-decreasing in k.
    """
    k = max(float(k), 0.0)
    lam = float(lam)
    if math.isnan(lam) or math.isnan(k):
        return 0.0
    if lam <= 0.0:
        # Poisson(0) never produces an event
        return 0.0 if k <= 0.0 else _MAX_SURPRISE
    if math.isinf(lam):
        return 0.0
    if math.isinf(k):
        return _MAX_SURPRISE

    regime = surprise_regime(k, lam)
    if regime == "exact":
        value = _exact(k, lam)
    elif regime == "normal":
        value = _normal(k, lam)
    else:
        # anchor the saddle curve to the normal tail at the regime seam so
        # the score is continuous and non-decreasing in k
        seam = lam + NORMAL_SIGMA_WIDTH * math.sqrt(lam)
        value = _normal(seam, lam) + _saddle(k, lam) - _saddle(seam, lam)

    # every regime saturates at the probability floor
    if not math.isfinite(value):
        value = _MAX_SURPRISE
    return min(max(value, 0.0), _MAX_SURPRISE)


__all__ = [
    'SurpriseRegime',
    'EXACT_LAMBDA_LIMIT',
    'NORMAL_SIGMA_WIDTH',
    'MIN_PROBABILITY',
    'surprise_regime',
    'neg_ln_poisson_tail',
]
