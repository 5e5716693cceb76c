"""
状态序列化器

实现游戏状态的规范JSON序列化和反序列化，以及统计数据导出。
规范序列化的输出是校验和的输入，必须保持确定性。
"""

import json
from typing import Any, Dict

from .types import GameState, StateFormatError

__all__ = [
    'StateSerializer',
    'SerializationError',
    'DeserializationError',
    'STATS_EXPORT_FILENAME',
]

STATS_EXPORT_FILENAME = 'shelby_cleo_stats.json'


class SerializationError(Exception):
    """序列化错误"""
    pass


class DeserializationError(Exception):
    """反序列化错误"""
    pass


class StateSerializer:
    """
    状态序列化器

    负责游戏状态的规范化序列化（紧凑JSON，固定字段顺序）与反序列化。
    """

    @staticmethod
    def serialize(state: GameState) -> str:
        """
        将状态序列化为规范JSON字符串

        先规范化（6位小数、整数统计），保证序列化结果在持久化往返后不变。

        Args:
            state: 游戏状态

        Returns:
            str: 紧凑JSON字符串

        Raises:
            SerializationError: 序列化失败时抛出
        """
        try:
            return json.dumps(state.normalized().to_dict(), separators=(',', ':'), ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"状态序列化失败: {str(e)}") from e

    @staticmethod
    def deserialize(json_str: str) -> GameState:
        """
        从JSON字符串反序列化状态

        Args:
            json_str: JSON字符串

        Returns:
            GameState: 合并默认值后的游戏状态

        Raises:
            DeserializationError: JSON格式错误或结构无效时抛出
        """
        try:
            data = json.loads(json_str)
            return GameState.from_dict(data)
        except (TypeError, ValueError, StateFormatError) as e:
            raise DeserializationError(f"状态反序列化失败: {str(e)}") from e

    @staticmethod
    def compact_blob(json_str: str) -> str:
        """
        把存储中的JSON文本重新输出为紧凑形式

        保留原有的键、键顺序和数值，只去掉空白，不合并默认值也不做规范化。
        对刚保存的状态，结果与serialize的输出相同。

        Raises:
            DeserializationError: JSON格式错误或包含非有限数值时抛出
        """
        try:
            data = json.loads(json_str)
            return json.dumps(data, separators=(',', ':'), ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise DeserializationError(f"存储文本无法重新序列化: {str(e)}") from e

    @staticmethod
    def export_stats(state: GameState) -> Dict[str, Any]:
        """构建导出的统计数据文档"""
        return {
            'totalEarned': state.total_earned,
            'totalSpent': state.total_spent,
            'activeSeconds': state.active_time_seconds,
            'meows': state.meows,
            'owned': list(state.owned),
        }

    @staticmethod
    def export_stats_json(state: GameState) -> str:
        """将统计数据渲染为可下载的JSON文本"""
        return json.dumps(StateSerializer.export_stats(state), ensure_ascii=False, indent=2)

    @staticmethod
    def write_stats_file(state: GameState, file_path: str) -> None:
        """
        将统计数据写入文件

        Args:
            state: 游戏状态
            file_path: 文件路径

        Raises:
            SerializationError: 文件写入失败时抛出
        """
        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                f.write(StateSerializer.export_stats_json(state))
        except OSError as e:
            raise SerializationError(f"统计数据保存到文件失败: {str(e)}") from e
