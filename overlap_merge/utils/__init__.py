"""
Utility modules for overlap_merge package.
"""

from . import config_utils
from . import exceptions
from . import logger

__all__ = [
    'config_utils',
    'exceptions',
    'logger'
]
