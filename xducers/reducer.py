import logging
from collections import Counter
from typing import Callable, Generic, Optional, TypeVar

from xducers.errors import ReductionError, SinkClosed
from xducers.reduced import Continue, Signal, Stop

log = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")
Step = Callable[[T, U], T]


class Reducer(Generic[T, U]):
    """
    A reducing function: start, step and finish.

    start() produces an accumulator when the caller has no seed.
    step(acc, input) consumes one input and returns Continue or Stop.
    finish(acc) is called exactly once at the end of a reduction.
    """

    def start(self) -> T:
        raise ReductionError("%s has no initial accumulator, supply a seed" % type(self).__name__)

    def step(self, acc: T, input: U) -> Signal:
        raise NotImplementedError()

    def finish(self, acc: T) -> T:
        return acc


class Reducing(Reducer[T, U]):
    """
    Lifts a plain (acc, val) -> acc function into a Reducer. The function may
    raise SinkClosed to reject an item, which stops the reduction.
    """

    def __init__(self, fn: Step, init: Optional[Callable[[], T]] = None):
        self.fn = fn
        self.init = init

    def start(self):
        if self.init is None:
            return super().start()
        return self.init()

    def step(self, acc, input):
        try:
            return Continue(self.fn(acc, input))
        except SinkClosed:
            log.debug("%r rejected %r", self, input)
            return Stop(acc)

    def __repr__(self):
        return "reducer(%s)" % getattr(self.fn, '__name__', self.fn)


def reducer(fn, init=None):
    """
    fn is (b -> a -> b)
    init is (() -> b), used when no seed is given.
    """
    return Reducing(fn, init)


def as_reducer(rf):
    if isinstance(rf, Reducer):
        return rf
    if callable(rf):
        return Reducing(rf)
    raise TypeError("Can't reduce with %s" % type(rf))


def arrayOf(acc, val):
    """
    Array accumulator which appends in place instead of reallocating on every
    step.
    """
    acc.append(val)
    return acc

def sumOf(acc, val):
    """Reducer which computes a sum"""
    return acc + val

def joinedWith(separator):
    def joint(acc, val):
        if acc == '':
            return val
        else:
            return "%s%s%s" % (acc, separator, val)
    return joint

def countOf(acc, val):
    """Counting map: acc is a Counter, val is counted once."""
    acc[val] += 1
    return acc


appending = reducer(arrayOf, list)
summing = reducer(sumOf, int)
counting = reducer(countOf, Counter)
