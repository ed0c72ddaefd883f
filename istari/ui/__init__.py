"""Terminal host components"""

from .scroll import ScrollDirection, ScrollState
from .text import TextController, run_text

__all__ = ['ScrollDirection', 'ScrollState', 'TextController', 'run_text']
