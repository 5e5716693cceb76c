"""
Core Module - 纯领域逻辑层

该模块包含点击游戏的核心业务逻辑。
核心模块只能依赖其他核心模块，不能依赖应用层或UI层。

Modules:
    state: 游戏状态数据模型和序列化
    checksum: 会话密钥和状态摘要计算
    storage: 键值存储和持久化状态存储
    guard: 点击频率防护
    display: 显示格式化和显示篡改监控
    lock: 会话锁定控制器
    shop: 升级商店
    casino: 抛硬币小游戏
    scheduler: 协作式定时任务调度器
    events: 领域事件系统
    invariant: 状态不变量检查
"""

__version__ = "1.0.0"

__all__ = []
