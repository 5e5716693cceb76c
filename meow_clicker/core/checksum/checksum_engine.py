"""
校验和引擎

对规范序列化的游戏状态加上会话密钥计算SHA-256摘要，用于发现存储被篡改。

注意：这只是提高随手篡改成本的威慑手段，不是安全边界。会话密钥在同一会话的
运行时内可以被读取，能打开开发者工具的用户完全可以重新计算摘要。
"""

from typing import TYPE_CHECKING
import hashlib
import hmac
import logging
import secrets

from ..state.types import GameState
from ..state.serializer import StateSerializer

if TYPE_CHECKING:
    from ..storage.kv_store import KeyValueStore

__all__ = ['ChecksumEngine', 'SessionSecret', 'digests_equal', 'DIGEST_HEX_LENGTH']

logger = logging.getLogger(__name__)

DIGEST_HEX_LENGTH = 64
SECRET_SEPARATOR = '|'


class SessionSecret:
    """
    会话密钥

    每个浏览器会话生成一次，存放在会话级存储中，不跨越持久存储的生命周期。
    """

    def __init__(self, value: str):
        if not value:
            raise ValueError("会话密钥不能为空")
        self._value = value

    @property
    def value(self) -> str:
        return self._value

    @staticmethod
    def generate() -> str:
        """生成高熵令牌：4个32位随机整数以'-'连接"""
        return '-'.join(str(secrets.randbits(32)) for _ in range(4))

    @classmethod
    def load_or_create(cls, session_store: 'KeyValueStore', key: str = 'sc_secret') -> 'SessionSecret':
        """
        读取会话存储中的密钥，不存在时生成并写入

        Args:
            session_store: 会话级键值存储
            key: 密钥存储键

        Returns:
            SessionSecret: 会话密钥
        """
        existing = session_store.get(key)
        if existing:
            return cls(existing)
        value = cls.generate()
        session_store.set(key, value)
        logger.info("已生成新的会话密钥")
        return cls(value)

    def __repr__(self) -> str:
        return "SessionSecret(<hidden>)"


class ChecksumEngine:
    """校验和引擎：digest(state) 是状态与会话密钥的纯函数"""

    def __init__(self, secret: SessionSecret):
        self._secret = secret

    @property
    def secret(self) -> SessionSecret:
        return self._secret

    def digest(self, state: GameState) -> str:
        """
        计算状态摘要

        Args:
            state: 游戏状态

        Returns:
            str: 64位小写十六进制SHA-256摘要
        """
        return self.digest_text(StateSerializer.serialize(state))

    def digest_text(self, compact_json: str) -> str:
        """对已序列化的紧凑JSON文本计算摘要，用于校验存储中的原始文本"""
        payload = compact_json + SECRET_SEPARATOR + self._secret.value
        return hashlib.sha256(payload.encode('utf-8')).hexdigest()


def digests_equal(a: str, b: str) -> bool:
    """常量时间比较两个摘要"""
    return hmac.compare_digest(a.encode('utf-8'), b.encode('utf-8'))
