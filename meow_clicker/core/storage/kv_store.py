"""
键值存储

提供持久化状态所需的字符串键值命名空间：
- MappingKeyValueStore: 以调用方持有的映射为后端的会话级存储
- MemoryKeyValueStore: 内存存储（也用于测试）
- JsonFileKeyValueStore: 以单个JSON文件为后端的持久存储
"""

from typing import Dict, List, MutableMapping, Optional, Protocol
import json
import logging
import os
import threading

__all__ = [
    'KeyValueStore',
    'MappingKeyValueStore',
    'MemoryKeyValueStore',
    'JsonFileKeyValueStore',
    'StorageError',
]

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """存储写入错误"""
    pass


class KeyValueStore(Protocol):
    """字符串键值存储协议"""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...

    def keys(self) -> List[str]:
        ...


class MappingKeyValueStore:
    """
    以可变映射为后端的键值存储

    映射由调用方持有。Streamlit界面传入st.query_params，会话密钥随URL
    保留，浏览器刷新后仍然是同一个会话。
    """

    def __init__(self, mapping: MutableMapping[str, str]):
        self._data = mapping

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"存储值必须是字符串: {type(value).__name__}")
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data.keys())


class MemoryKeyValueStore(MappingKeyValueStore):
    """内存键值存储"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        super().__init__(dict(initial) if initial else {})


class JsonFileKeyValueStore:
    """
    JSON文件键值存储

    整个命名空间保存为磁盘上的一个JSON对象。不在内存中缓存：每次读取都
    读磁盘，写入时读出、修改、再写回，因此运行期间对文件的外部修改对后续
    读取可见。每次写入都先写临时文件、fsync，再原子替换目标文件。
    无法读取的文件视为空命名空间。
    """

    def __init__(self, file_path: str):
        """
        初始化文件存储

        Args:
            file_path: 数据文件路径
        """
        self._file_path = file_path
        self._lock = threading.RLock()

    @property
    def file_path(self) -> str:
        return self._file_path

    def _read_file(self) -> Dict[str, str]:
        if not os.path.exists(self._file_path):
            return {}
        try:
            with open(self._file_path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"无法读取存储文件 {self._file_path}，按空存储处理: {e}")
            return {}
        if not isinstance(raw, dict):
            logger.warning(f"存储文件 {self._file_path} 顶层不是对象，按空存储处理")
            return {}
        return {str(k): v for k, v in raw.items() if isinstance(v, str)}

    def _flush(self, data: Dict[str, str]) -> None:
        tmp_path = self._file_path + '.tmp'
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self._file_path)
        except OSError as e:
            raise StorageError(f"写入存储文件失败: {e}") from e

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read_file().get(key)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"存储值必须是字符串: {type(value).__name__}")
        with self._lock:
            data = self._read_file()
            data[key] = value
            self._flush(data)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._read_file()
            if key in data:
                del data[key]
                self._flush(data)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._read_file().keys())
