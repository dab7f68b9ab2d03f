import queue
import pytest
from xducers.compose import compose, identity
from xducers.errors import ReductionError, SinkClosed, TransformError
from xducers.reduced import Continue, Stop
from xducers.reducer import arrayOf, countOf
from xducers.sink import Feeder, Sink, push, queue_sink
from xducers.transduce import START, transduce
from xducers.transducer import filtering, mapping, partitioning, taking
from collections import Counter

def bounded(limit):
    return Sink(arrayOf, closed=lambda acc: len(acc) >= limit, start=list)

def test_sink_step():
    sink = Sink(arrayOf)
    assert sink.step([], 1) == Continue([1])
    assert sink.finish([1]) == [1]

def test_sink_closed_before_add():
    sink = Sink(arrayOf, closed=lambda acc: True)
    assert sink.step([], 1) == Stop([])

def test_sink_closed_after_add():
    assert bounded(2).step([1], 2) == Stop([1, 2])

def test_sink_rejects():
    def add(acc, item):
        if item < 0:
            raise SinkClosed()
        return acc + [item]
    sink = Sink(add)
    assert sink.step([1], -1) == Stop([1])

def test_sink_hooks():
    sink = Sink(arrayOf, start=lambda: ['open'], flush=lambda acc: acc + ['flushed'])
    assert transduce(identity, sink, START, [1]) == ['open', 1, 'flushed']

def test_sink_without_start():
    with pytest.raises(ReductionError):
        Sink(arrayOf).start()

def test_closed_sink_stops_upstream():
    pulled = []
    def src():
        for i in range(100):
            pulled.append(i)
            yield i
    xform = compose(filtering(lambda x: x % 3 == 0), mapping(str))
    assert transduce(xform, bounded(3), START, src()) == ['0', '3', '6']
    assert pulled == list(range(7))

def test_counting_sink():
    words = "the cat saw the other cat".split()
    counts = transduce(mapping(str.upper), Sink(countOf, start=Counter), START, words)
    assert counts == Counter({'THE': 2, 'CAT': 2, 'SAW': 1, 'OTHER': 1})

def test_queue_sink():
    q = queue.Queue(maxsize=3)
    result = transduce(mapping(lambda x: x * 2), queue_sink(q), START, range(10))
    assert result is q
    assert [q.get_nowait() for _ in range(q.qsize())] == [0, 2, 4]

def test_push_feed():
    feeder = push(mapping(lambda x: x + 1), Sink(arrayOf), [])
    assert feeder.feed(1)
    assert feeder.feed(2)
    assert feeder.finish() == [2, 3]

def test_push_stop():
    feeder = push(taking(2), Sink(arrayOf, start=list))
    assert feeder.feed('a')
    assert not feeder.feed('b')
    assert feeder.stopped
    with pytest.raises(ReductionError):
        feeder.feed('c')
    assert feeder.finish() == ['a', 'b']

def test_push_finish_twice():
    feeder = push(identity, arrayOf, [])
    feeder.finish()
    with pytest.raises(ReductionError):
        feeder.finish()
    with pytest.raises(ReductionError):
        feeder.feed(1)

def test_push_plain_function():
    feeder = push(filtering(bool), lambda acc, x: acc + [x], [])
    assert feeder.feed_all([0, 1, '', 'a'])
    assert feeder.finish() == [1, 'a']

def test_push_feed_all_stops():
    feeder = push(identity, bounded(2))
    assert not feeder.feed_all(iter(range(10)))
    assert feeder.acc == [0, 1]

def test_feeder_context_finishes():
    with push(partitioning(2), arrayOf, []) as feeder:
        feeder.feed_all([1, 2, 3])
    assert feeder.finished
    assert feeder.acc == [(1, 2), (3,)]

def test_feeder_context_abandons_on_error():
    with pytest.raises(RuntimeError):
        with push(partitioning(2), arrayOf, []) as feeder:
            feeder.feed(1)
            raise RuntimeError("producer failed")
    assert not feeder.finished

def test_push_reuses_transducer():
    take1 = taking(1)
    a = push(take1, arrayOf, [])
    b = push(take1, arrayOf, [])
    assert not a.feed('a')
    assert not b.feed('b')
    assert (a.finish(), b.finish()) == (['a'], ['b'])

def test_feeder_wraps_rf():
    feeder = Feeder(Sink(arrayOf), [])
    feeder.feed(5)
    assert feeder.acc == [5]

def explode_on_two(x):
    if x == 2:
        raise ValueError(x)
    return x

def test_feed_after_error():
    feeder = push(mapping(explode_on_two), arrayOf, [])
    assert feeder.feed(1)
    with pytest.raises(TransformError):
        feeder.feed(2)
    assert feeder.failed
    with pytest.raises(ReductionError):
        feeder.feed(3)
    with pytest.raises(ReductionError):
        feeder.feed_all([4, 5])
    assert feeder.acc == [1]

def test_finish_after_error():
    feeder = push(compose(taking(2), mapping(explode_on_two)), arrayOf, [])
    with pytest.raises(TransformError):
        feeder.feed(2)
    with pytest.raises(ReductionError):
        feeder.finish()
    assert not feeder.finished

def test_feeder_context_skips_finish_after_caught_error():
    xform = compose(mapping(explode_on_two), partitioning(2))
    with push(xform, Sink(arrayOf, flush=lambda acc: acc + ['flushed']), []) as feeder:
        feeder.feed(1)
        with pytest.raises(TransformError):
            feeder.feed(2)
    assert not feeder.finished
    assert feeder.acc == []
