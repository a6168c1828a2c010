"""
CT Generation

Control files and configured counters to a CT instrumentation script.
"""

from .ct_generator import CTGenerator

__all__ = [
    'CTGenerator'
]
