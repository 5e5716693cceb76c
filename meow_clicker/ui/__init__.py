"""
UI Layer - 用户界面层

UI只负责把用户操作转发给命令服务、展示渲染表面上的文本，不包含任何游戏逻辑。
"""
