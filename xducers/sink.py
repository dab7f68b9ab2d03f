import logging
import queue

from xducers.errors import ReductionError, SinkClosed
from xducers.reduced import Stop
from xducers.reducer import Reducing, as_reducer
from xducers.transduce import START

log = logging.getLogger(__name__)


class Sink(Reducing):
    """
    Terminal reducer over an external consumer.

    add(state, item) -> state accepts one item and may raise SinkClosed to
    reject it. closed(state) -> bool, when given, reports that the consumer
    takes no more items. Either way the reduction gets a Stop, so upstream
    stages stop producing into a dead sink.
    start and flush are optional open/flush hooks.
    """

    def __init__(self, add, closed=None, start=None, flush=None):
        super().__init__(add, start)
        self.closed = closed
        self.flush = flush

    def is_closed(self, acc):
        return self.closed is not None and self.closed(acc)

    def step(self, acc, item):
        if self.is_closed(acc):
            log.debug("sink closed, not adding %r", item)
            return Stop(acc)
        signal = super().step(acc, item)
        if not signal.stopped and self.is_closed(signal.value):
            return Stop(signal.value)
        return signal

    def finish(self, acc):
        if self.flush is None:
            return acc
        return self.flush(acc)

    def __repr__(self):
        return "Sink(%s)" % getattr(self.fn, '__name__', self.fn)


def _put(q, item):
    try:
        q.put_nowait(item)
    except queue.Full:
        raise SinkClosed("queue is full")
    return q


def queue_sink(q):
    """
    Adapts a bounded queue (anything whose put_nowait raises queue.Full) as a
    sink. The queue is the accumulator; a full queue stops the reduction.
    """
    return Sink(_put, start=lambda: q)


class Feeder:
    """
    Push mode: an applied reducer stack plus its accumulator, fed one item
    at a time by an external producer instead of the transduce loop.
    Not thread safe; producers sharing a feeder must serialize feed calls.
    """

    def __init__(self, rf, acc):
        self.rf = rf
        self.acc = acc
        self.stopped = False
        self.finished = False
        self.failed = False

    def _check(self):
        if self.failed:
            raise ReductionError("reduction failed")

    def feed(self, item):
        """
        Steps item through the stack. Returns False once the stack has stopped.
        A step that raises abandons the reduction.
        """
        self._check()
        if self.finished:
            raise ReductionError("feed after finish")
        if self.stopped:
            raise ReductionError("feed after the reduction stopped")
        try:
            signal = self.rf.step(self.acc, item)
        except Exception:
            log.debug("feeder failed on %r", item)
            self.failed = True
            raise
        self.acc = signal.value
        if signal.stopped:
            log.debug("feeder stopped on %r", item)
            self.stopped = True
        return not self.stopped

    def feed_all(self, items):
        """Feeds items until they run out or the stack stops."""
        self._check()
        for item in items:
            if not self.feed(item):
                break
        return not self.stopped

    def finish(self):
        self._check()
        if self.finished:
            raise ReductionError("finish called twice")
        self.finished = True
        self.acc = self.rf.finish(self.acc)
        return self.acc

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        # A failed reduction is abandoned, not finished.
        if exc_type is None and not self.finished and not self.failed:
            self.finish()
        return False


def push(xform, sink, seed=START):
    """
    Applies xform to sink once and returns a Feeder for it. sink is a Reducer
    or a plain add function.
    """
    rf = xform.apply(as_reducer(sink))
    acc = rf.start() if seed is START else seed
    return Feeder(rf, acc)
