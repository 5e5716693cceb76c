"""
Checksum Module - 校验和

Classes:
    ChecksumEngine: 状态摘要计算
    SessionSecret: 会话密钥
"""

from .checksum_engine import ChecksumEngine, SessionSecret, digests_equal, DIGEST_HEX_LENGTH

__all__ = [
    'ChecksumEngine',
    'SessionSecret',
    'digests_equal',
    'DIGEST_HEX_LENGTH',
]
