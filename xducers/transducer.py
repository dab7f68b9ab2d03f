from contextlib import closing
from typing import Callable, Iterable, TypeVar

from func_prototypes import typed

from xducers.errors import TransformError, guarded
from xducers.reduced import Continue, Stop
from xducers.reducer import Reducer

A = TypeVar("A")
B = TypeVar("B")


class Transducer:
    """
    Reusable description of a stage. apply(rf) builds a fresh stage around rf,
    so any state the stage needs belongs to that one reduction.
    """
    __slots__ = ('stage', 'args')

    def __init__(self, stage, *args):
        object.__setattr__(self, 'stage', stage)
        object.__setattr__(self, 'args', args)

    def __setattr__(self, name, value):
        raise AttributeError("Transducer is immutable")

    def apply(self, rf: Reducer) -> Reducer:
        return self.stage(rf, *self.args)

    def __repr__(self):
        name = getattr(self.stage, '__name__', repr(self.stage))
        return "Transducer(%s%s)" % (name, "".join(", %r" % (a,) for a in self.args))


class Stage(Reducer):
    """Wraps an inner reducer; start, step and finish pass straight through."""

    def __init__(self, rf: Reducer):
        self.rf = rf

    def start(self):
        return self.rf.start()

    def step(self, acc, input):
        return self.rf.step(acc, input)

    def finish(self, acc):
        return self.rf.finish(acc)


class Mapping(Stage):

    def __init__(self, rf, f: Callable[[A], B]):
        super().__init__(rf)
        self.f = f

    def step(self, acc, input):
        return self.rf.step(acc, guarded(self.f, input))


def mapping(f: Callable[[A], B]) -> Transducer:
    return Transducer(Mapping, f)


class Filtering(Stage):

    def __init__(self, rf, pred):
        super().__init__(rf)
        self.pred = pred

    def step(self, acc, input):
        if guarded(self.pred, input):
            return self.rf.step(acc, input)
        return Continue(acc)


def filtering(pred: Callable[[A], bool]) -> Transducer:
    """
    pred is (a -> Bool)
    Elements failing pred never reach the inner reducer.
    """
    return Transducer(Filtering, pred)


def _expanded(f, input):
    try:
        yield from f(input)
    except Exception as e:
        raise TransformError(input, e) from e


class MapCatting(Stage):
    """
    Feeds every element of f(input) to the inner reducer in order. A Stop from
    the inner reducer abandons the rest of the expansion.
    """

    def __init__(self, rf, f: Callable[[A], Iterable[B]]):
        super().__init__(rf)
        self.f = f

    def step(self, acc, input):
        signal = Continue(acc)
        with closing(_expanded(self.f, input)) as items:
            for item in items:
                signal = self.rf.step(signal.value, item)
                if signal.stopped:
                    break
        return signal


def mapcatting(f: Callable[[A], Iterable[B]]) -> Transducer:
    return Transducer(MapCatting, f)


def _itself(x):
    return x


# Flattens inputs which are themselves iterable.
cat = mapcatting(_itself)


def _check_count(name, n, least):
    # bool is an int subclass, but True is not a count.
    if isinstance(n, bool):
        raise TypeError("%s requires an int count, got %r" % (name, n))
    if n < least:
        raise ValueError("%s requires n >= %d, got %d" % (name, least, n))


class Taking(Stage):

    def __init__(self, rf, n):
        super().__init__(rf)
        self.n = n
        self.taken = 0

    def step(self, acc, input):
        if self.taken >= self.n:
            return Stop(acc)
        self.taken += 1
        signal = self.rf.step(acc, input)
        if signal.stopped:
            return signal
        if self.taken == self.n:
            return Stop(signal.value)
        return signal


@typed(int)
def taking(n):
    """Passes the first n elements, then stops the reduction."""
    _check_count("taking", n, 0)
    return Transducer(Taking, n)


class TakingWhile(Stage):

    def __init__(self, rf, pred):
        super().__init__(rf)
        self.pred = pred

    def step(self, acc, input):
        if guarded(self.pred, input):
            return self.rf.step(acc, input)
        return Stop(acc)


def taking_while(pred):
    return Transducer(TakingWhile, pred)


class Dropping(Stage):

    def __init__(self, rf, n):
        super().__init__(rf)
        self.n = n
        self.dropped = 0

    def step(self, acc, input):
        if self.dropped < self.n:
            self.dropped += 1
            return Continue(acc)
        return self.rf.step(acc, input)


@typed(int)
def dropping(n):
    _check_count("dropping", n, 0)
    return Transducer(Dropping, n)


class DroppingWhile(Stage):

    def __init__(self, rf, pred):
        super().__init__(rf)
        self.pred = pred
        self.dropping = True

    def step(self, acc, input):
        if self.dropping:
            if guarded(self.pred, input):
                return Continue(acc)
            self.dropping = False
        return self.rf.step(acc, input)


def dropping_while(pred):
    return Transducer(DroppingWhile, pred)


class Partitioning(Stage):
    """
    Groups inputs into tuples of n. A short final tuple is flushed by finish
    before the inner reducer finishes.
    """

    def __init__(self, rf, n):
        super().__init__(rf)
        self.n = n
        self.buffer = []

    def step(self, acc, input):
        self.buffer.append(input)
        if len(self.buffer) < self.n:
            return Continue(acc)
        chunk = tuple(self.buffer)
        self.buffer.clear()
        return self.rf.step(acc, chunk)

    def finish(self, acc):
        if self.buffer:
            chunk = tuple(self.buffer)
            self.buffer.clear()
            acc = self.rf.step(acc, chunk).value
        return self.rf.finish(acc)


@typed(int)
def partitioning(n):
    _check_count("partitioning", n, 1)
    return Transducer(Partitioning, n)
