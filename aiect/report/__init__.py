"""
Report Generation

CT script rendering.
"""

from .ct_writer import (
    CTScriptWriter,
    default_output_path
)

__all__ = [
    'CTScriptWriter',
    'default_output_path'
]
