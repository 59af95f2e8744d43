"""termview - the buffer, viewport and cursor core of a terminal text editor."""

from .buffer import Buffer, InvalidPositionError
from .surface import Surface, MemorySurface
from .viewport import Viewport, ViewportState, TAB_WIDTH

__all__ = [
    'Buffer',
    'InvalidPositionError',
    'Surface',
    'MemorySurface',
    'Viewport',
    'ViewportState',
    'TAB_WIDTH',
]
