"""
Meow Clicker - 点击游戏完整性核心

包含受校验和保护的游戏状态、点击频率防护、显示篡改监控、
会话锁定控制，以及升级商店和抛硬币小游戏。
"""

__version__ = "1.0.0"
