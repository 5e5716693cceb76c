"""
State Module - 游戏状态

Classes:
    GameState: 规范游戏状态
    StateSerializer: 规范JSON序列化器
"""

from .types import GameState, StateFormatError, round6, PERSISTED_FIELDS
from .serializer import (
    StateSerializer,
    SerializationError,
    DeserializationError,
    STATS_EXPORT_FILENAME,
)

__all__ = [
    'GameState',
    'StateFormatError',
    'round6',
    'PERSISTED_FIELDS',
    'StateSerializer',
    'SerializationError',
    'DeserializationError',
    'STATS_EXPORT_FILENAME',
]
