"""
Shared fixtures: a scripted random source so turns can be replayed exactly.
"""

import pytest


class ScriptedRandom:
    """
    Stand-in for random.Random used by the engine.

    choice() returns the queued descriptions in order, randint() the queued
    integers. Once a queue runs dry the first option / lower bound is used.
    """

    def __init__(self, choices=None, ints=None):
        self.choices = list(choices or [])
        self.ints = list(ints or [])

    def choice(self, seq):
        if self.choices:
            return self.choices.pop(0)
        return seq[0]

    def randint(self, a, b):
        if self.ints:
            return self.ints.pop(0)
        return a


@pytest.fixture
def scripted():
    """Factory for ScriptedRandom instances."""
    return ScriptedRandom
