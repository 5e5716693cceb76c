"""
显示格式化

把规范状态中的数值转换为界面上显示的文本。
"""

import math
import re

__all__ = [
    'format_amount',
    'format_multiplier',
    'format_duration',
    'format_rate',
    'normalize_rendered',
]

# 显示文本中保留的字符：数字、小数点和单位字母
_RENDERED_NOISE = re.compile(r'[^\dkMB.]')


def format_amount(n: float) -> str:
    """友好的数量格式：1.5k、2.00M、3.00B，小于1000时向下取整"""
    if n >= 1e9:
        return f"{n / 1e9:.2f}B"
    if n >= 1e6:
        return f"{n / 1e6:.2f}M"
    if n >= 1e3:
        return f"{n / 1e3:.1f}k"
    return str(math.floor(n))


def format_multiplier(m: float) -> str:
    return f"{m:.2f}×"


def format_rate(rate: float) -> str:
    return f"{rate:.1f}"


def format_duration(seconds: int) -> str:
    """格式化活跃时长：45s、3m 20s、2h 5m"""
    if seconds < 60:
        return f"{seconds}s"
    minutes, secs = divmod(seconds, 60)
    if minutes < 60:
        return f"{minutes}m {secs}s"
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes}m"


def normalize_rendered(text: str) -> str:
    """去掉显示文本中除数字、小数点和单位字母以外的字符"""
    return _RENDERED_NOISE.sub('', text or '')
