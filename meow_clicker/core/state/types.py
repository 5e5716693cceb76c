"""
游戏状态类型定义

定义点击游戏的规范状态记录及其持久化字段布局。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List
import math

__all__ = [
    'GameState',
    'StateFormatError',
    'round6',
    'PERSISTED_FIELDS',
]

# 持久化字段顺序，序列化摘要依赖此顺序
PERSISTED_FIELDS = (
    'meows',
    'multiplier',
    'owned',
    'totalEarned',
    'totalSpent',
    'activeTimeSeconds',
)


class StateFormatError(ValueError):
    """状态结构无法解析"""
    pass


def round6(value: float) -> float:
    """内部计算精度：保留6位小数"""
    return round(float(value), 6)


@dataclass
class GameState:
    """
    规范游戏状态

    Attributes:
        meows: 当前喵币余额，非负，内部保留6位小数
        multiplier: 点击倍率，等于所有已拥有升级倍率之积
        owned: 已拥有的升级ID列表（无重复）
        total_earned: 累计获得（整数，单调不减）
        total_spent: 累计花费（整数，单调不减）
        active_time_seconds: 累计前台活跃秒数
    """
    meows: float = 0.0
    multiplier: float = 1.0
    owned: List[str] = field(default_factory=list)
    total_earned: int = 0
    total_spent: int = 0
    active_time_seconds: int = 0

    @classmethod
    def default(cls) -> 'GameState':
        """创建默认初始状态"""
        return cls()

    def copy(self) -> 'GameState':
        """返回独立副本"""
        return GameState(
            meows=self.meows,
            multiplier=self.multiplier,
            owned=list(self.owned),
            total_earned=self.total_earned,
            total_spent=self.total_spent,
            active_time_seconds=self.active_time_seconds,
        )

    def normalized(self) -> 'GameState':
        """返回规范化副本（6位小数、整数统计），与持久化往返后的结果一致"""
        return GameState.from_dict(self.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        """转换为持久化字段布局"""
        return {
            'meows': self.meows,
            'multiplier': self.multiplier,
            'owned': list(self.owned),
            'totalEarned': self.total_earned,
            'totalSpent': self.total_spent,
            'activeTimeSeconds': self.active_time_seconds,
        }

    @classmethod
    def from_dict(cls, data: Any) -> 'GameState':
        """
        从持久化字典构建状态

        缺失字段使用默认值，未知字段忽略。

        Args:
            data: 反序列化得到的字典

        Returns:
            GameState: 规范化后的状态

        Raises:
            StateFormatError: 结构无法解析时抛出
        """
        if not isinstance(data, dict):
            raise StateFormatError(f"状态必须是对象，实际为: {type(data).__name__}")

        merged = cls.default().to_dict()
        merged.update({k: v for k, v in data.items() if k in PERSISTED_FIELDS})

        owned = merged['owned']
        if not isinstance(owned, list) or not all(isinstance(item, str) for item in owned):
            raise StateFormatError(f"owned必须是字符串列表: {owned!r}")

        try:
            return cls(
                meows=round6(_as_number(merged['meows'])),
                multiplier=round6(_as_number(merged['multiplier'])),
                owned=list(owned),
                total_earned=_as_int(merged['totalEarned']),
                total_spent=_as_int(merged['totalSpent']),
                active_time_seconds=_as_int(merged['activeTimeSeconds']),
            )
        except (TypeError, ValueError, OverflowError) as e:
            raise StateFormatError(f"状态字段类型无效: {e}") from e


def _as_number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"期望数值，实际为: {value!r}")
    if not math.isfinite(value):
        raise ValueError(f"数值必须有限: {value!r}")
    return float(value)


def _as_int(value: Any) -> int:
    return int(math.floor(_as_number(value)))
