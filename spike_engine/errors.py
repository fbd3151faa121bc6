# spike_engine/errors.py
"""
Exception types raised by the spike engine.

Numeric degeneracy never raises; only construction-time configuration
problems do.
"""


class SpikeEngineError(Exception):
    """Base class for spike engine errors."""


class ConfigError(SpikeEngineError, ValueError):
    """Raised when a component is constructed with invalid parameters."""


__all__ = [
    'SpikeEngineError',
    'ConfigError',
]
