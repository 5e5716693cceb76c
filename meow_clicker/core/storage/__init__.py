"""
Storage Module - 持久化存储

Classes:
    KeyValueStore: 键值存储协议
    MappingKeyValueStore: 映射后端的键值存储
    MemoryKeyValueStore: 内存键值存储
    JsonFileKeyValueStore: JSON文件键值存储
    PersistentStateStore: 带摘要的状态存储
    StorageKeys: 存储键名
"""

from .kv_store import KeyValueStore, MappingKeyValueStore, MemoryKeyValueStore, JsonFileKeyValueStore, StorageError
from .state_store import StorageKeys, PersistentStateStore

__all__ = [
    'KeyValueStore',
    'MappingKeyValueStore',
    'MemoryKeyValueStore',
    'JsonFileKeyValueStore',
    'StorageError',
    'StorageKeys',
    'PersistentStateStore',
]
