# core module
"""Container primitives shared by the detection layer."""

from spike_engine.core.ring import RingBuffer

__all__ = ['RingBuffer']
