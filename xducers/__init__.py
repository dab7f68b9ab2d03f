from xducers.errors import XducersError, TransformError, ReductionError, SinkClosed
from xducers.reduced import Signal, Continue, Stop
from xducers.reducer import \
    Reducer,    \
    Reducing,   \
    appending,  \
    arrayOf,    \
    countOf,    \
    counting,   \
    joinedWith, \
    reducer,    \
    sumOf,      \
    summing
from xducers.transducer import \
    Stage,          \
    Transducer,     \
    cat,            \
    dropping,       \
    dropping_while, \
    filtering,      \
    mapcatting,     \
    mapping,        \
    partitioning,   \
    taking,         \
    taking_while
from xducers.compose import compose, identity
from xducers.transduce import START, into, reduceWith, sequence, transduce
from xducers.sink import Feeder, Sink, push, queue_sink
