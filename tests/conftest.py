"""Shared fixtures for torus_seir tests."""

import pytest

from torus_seir.core.random_source import RandomSource


class ScriptedRandomSource(RandomSource):
    """RandomSource whose uniform draws come from a fixed script."""

    def __init__(self, uniforms):
        super().__init__(seed=0)
        self._uniforms = list(uniforms)

    def next_uniform(self) -> float:
        return self._uniforms.pop(0)


@pytest.fixture
def scripted_rng():
    return ScriptedRandomSource
