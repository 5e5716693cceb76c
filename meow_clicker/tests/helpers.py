"""
测试辅助工具
"""

import random


class FixedRandom(random.Random):
    """固定返回值的随机源，0.1为正面，0.9为反面"""

    def __init__(self, value: float):
        super().__init__(0)
        self._value = value

    def random(self) -> float:
        return self._value


HEADS_RNG_VALUE = 0.1
TAILS_RNG_VALUE = 0.9
