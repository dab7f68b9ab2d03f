class Signal:
    """
    Result of a step: the new accumulator plus whether to keep going.
    Continue and Stop wrap the same accumulator type.
    """
    __slots__ = ('value',)
    stopped = False

    def __init__(self, value):
        self.value = value

    def __eq__(self, other):
        return type(self) is type(other) and self.value == other.value

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.value)


class Continue(Signal):
    __slots__ = ()


class Stop(Signal):
    __slots__ = ()
    stopped = True


def stop(signal):
    """Turn signal into a Stop, keeping its accumulator."""
    if signal.stopped:
        return signal
    return Stop(signal.value)
