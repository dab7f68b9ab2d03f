import pytest
from xducers.reducer import Reducer, arrayOf
from xducers.reduced import Continue


class Recording(Reducer):
    """Appending reducer which counts its start, step and finish calls."""

    def __init__(self):
        self.starts = 0
        self.steps = 0
        self.finishes = 0

    def start(self):
        self.starts += 1
        return []

    def step(self, acc, input):
        self.steps += 1
        return Continue(arrayOf(acc, input))

    def finish(self, acc):
        self.finishes += 1
        return acc


class CountedSource:
    """Iterable which remembers how many elements were pulled from it."""

    def __init__(self, items):
        self.items = items
        self.pulled = 0

    def __iter__(self):
        for item in self.items:
            self.pulled += 1
            yield item


@pytest.fixture
def recording():
    return Recording()


@pytest.fixture
def source():
    return CountedSource(list(range(10)))
