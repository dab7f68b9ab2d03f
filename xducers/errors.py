class XducersError(Exception):
    """Base class for errors raised by xducers."""


class TransformError(XducersError):
    """
    A user supplied transform or predicate raised while processing input.
    input is the element being processed, cause is the original exception.
    """
    def __init__(self, input, cause):
        super().__init__("transform failed on %r: %r" % (input, cause))
        self.input = input
        self.cause = cause


class ReductionError(XducersError):
    """The reducing function protocol was misused."""


class SinkClosed(XducersError):
    """Raised by a sink's add to reject an item."""


def guarded(fn, input):
    """Call fn(input), reporting any failure as a TransformError."""
    try:
        return fn(input)
    except Exception as e:
        raise TransformError(input, e) from e
