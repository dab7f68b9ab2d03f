from functools import reduce

from xducers.transducer import Transducer


def _stacked(rf, xforms):
    """
    Applies xforms right-to-left so the first transducer is the outermost
    stage and sees each element first.
    """
    return reduce(lambda inner, xform: xform.apply(inner), reversed(xforms), rf)


def compose(*xforms):
    """
    Stacks transducers. Composition order is processing order:
    compose(filtering(p), mapping(f)) filters raw elements, then maps the
    survivors.
    """
    for xform in xforms:
        if not isinstance(xform, Transducer):
            raise TypeError("Can't compose %s, expected a Transducer" % type(xform))
    if len(xforms) == 1:
        return xforms[0]
    return Transducer(_stacked, xforms)


identity = compose()
