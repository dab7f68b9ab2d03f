# Worked out from https://raganwald.com/2017/04/30/transducers.html
# with an explicit start/step/finish protocol and early termination.
import logging
from collections import deque

from xducers.reducer import arrayOf, as_reducer, reducer

log = logging.getLogger(__name__)


class _Start:
    def __repr__(self):
        return "START"


# Seed meaning: ask the reducer for its initial accumulator.
START = _Start()


def reduceWith(reducer, seed, iterable):
    """
    reduceWith takes reducer as first argument, computes a reduction over iterable.
    Think foldl from Haskell.
    reducer is (b -> a -> b)
    Seed is b
    iterable is [a]
    reduceWith is (b -> a -> b) -> b -> [a] -> b
    """
    accumulation = seed
    for value in iterable:
        accumulation = reducer(accumulation, value)
    return accumulation


def transduce(xform, reducer, seed, iterable):
    """
    xform is a Transducer
    reducer is a Reducer, or a plain (b -> a -> b) function
    seed is b, or START to use reducer.start()
    iterable is [a]

    Makes a single pass over iterable and stops pulling from it as soon as a
    stage returns Stop. finish is called exactly once, unless a step raised.
    """
    rf = xform.apply(as_reducer(reducer))
    acc = rf.start() if seed is START else seed
    steps = 0
    for value in iterable:
        steps += 1
        signal = rf.step(acc, value)
        acc = signal.value
        if signal.stopped:
            log.debug("reduction stopped after %d steps", steps)
            break
    else:
        log.debug("source exhausted after %d steps", steps)
    return rf.finish(acc)


def into(xform, reducer, iterable):
    """transduce, seeded by reducer.start()."""
    return transduce(xform, reducer, START, iterable)


def _drain(buffer):
    while buffer:
        yield buffer.popleft()


_buffering = reducer(arrayOf)


def sequence(xform, iterable):
    """
    Lazily applies xform to iterable, yielding outputs as each input is
    stepped. The source is not advanced past the element that stopped the
    reduction.
    """
    rf = xform.apply(_buffering)
    buffer = deque()
    for value in iterable:
        signal = rf.step(buffer, value)
        yield from _drain(buffer)
        if signal.stopped:
            break
    rf.finish(buffer)
    yield from _drain(buffer)
