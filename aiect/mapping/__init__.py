"""
Counter Mapping

Static info store counters to register addresses and control files.
"""

from .counter_mapper import (
    CTCounterInfo,
    CounterMapper,
    StaticInfoStore
)

__all__ = [
    'CTCounterInfo',
    'CounterMapper',
    'StaticInfoStore'
]
