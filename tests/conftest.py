"""
Shared fixtures for Neon Pong tests
"""

import random

import pytest


class FixedRandom(random.Random):
    """Random source whose random() always returns the same value"""

    def __init__(self, value: float = 0.5):
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def fixed_random():
    """Factory for random sources with a fixed random() value"""
    return FixedRandom
