"""
持久化状态存储

在持久键值存储中保存规范状态及其摘要。状态和摘要是两个独立的键，
依次写入；两次写入之间崩溃属于可接受且不做恢复的边界情况。
"""

from dataclasses import dataclass
from typing import Optional
import logging

from ..checksum.checksum_engine import ChecksumEngine, digests_equal
from ..state.types import GameState
from ..state.serializer import StateSerializer, DeserializationError
from .kv_store import KeyValueStore

__all__ = ['StorageKeys', 'PersistentStateStore']

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageKeys:
    """存储键名"""
    state: str = 'sc_state'
    checksum: str = 'sc_check'
    secret: str = 'sc_secret'
    stats: str = 'sc_stats'


class PersistentStateStore:
    """持久化状态存储"""

    def __init__(self, durable: KeyValueStore, checksum_engine: ChecksumEngine,
                 keys: Optional[StorageKeys] = None):
        """
        初始化状态存储

        Args:
            durable: 持久键值存储
            checksum_engine: 校验和引擎
            keys: 存储键名
        """
        self._durable = durable
        self._checksum = checksum_engine
        self._keys = keys or StorageKeys()

    @property
    def keys(self) -> StorageKeys:
        return self._keys

    @property
    def checksum_engine(self) -> ChecksumEngine:
        return self._checksum

    def load(self) -> Optional[GameState]:
        """
        读取持久化状态

        Returns:
            Optional[GameState]: 不存在或格式错误时返回None
        """
        raw = self._durable.get(self._keys.state)
        if not raw:
            return None
        try:
            return StateSerializer.deserialize(raw)
        except DeserializationError as e:
            logger.warning(f"持久化状态格式错误，按不存在处理: {e}")
            return None

    def save(self, state: GameState) -> str:
        """
        计算摘要并依次写入状态和摘要

        Args:
            state: 游戏状态

        Returns:
            str: 写入的摘要
        """
        digest = self._checksum.digest(state)
        self._durable.set(self._keys.state, StateSerializer.serialize(state))
        self._durable.set(self._keys.checksum, digest)
        return digest

    def verify(self) -> bool:
        """
        校验持久化状态与摘要是否一致

        摘要针对存储中的原始文本（去掉空白后）计算，而不是针对合并默认值、
        规范化之后的状态，因此多出的键和被规范化抹掉的改动同样校验失败。

        Returns:
            bool: 没有状态可校验时返回True；摘要缺失或不一致时返回False
        """
        if self.load() is None:
            return True
        saved = self._durable.get(self._keys.checksum)
        try:
            current = self._checksum.digest_text(StateSerializer.compact_blob(self._durable.get(self._keys.state)))
        except DeserializationError as e:
            logger.warning(f"持久化状态无法重新序列化: {e}")
            return False
        ok = saved is not None and digests_equal(current, saved)
        if not ok:
            logger.warning("持久化状态摘要不一致")
        return ok

    def stored_digest(self) -> Optional[str]:
        return self._durable.get(self._keys.checksum)

    def clear(self) -> None:
        """删除状态和摘要"""
        self._durable.remove(self._keys.state)
        self._durable.remove(self._keys.checksum)
