import sys
import timeit
from functools import partial

from docopt import docopt
from tabulate import tabulate

from xducers.compose import compose
from xducers.reducer import appending
from xducers.transduce import START, sequence, transduce
from xducers.transducer import filtering, mapping

BENCH_USAGE = """
xducers-bench

Times the same pipeline (keep evens, square them, add one) written as a
plain loop, a comprehension, builtins, transduce and sequence.

Usage:
  xducers-bench [--size=<n>] [--number=<n>] [--case=<name>]...
  xducers-bench --list

Options:
  --size=<n>     Elements in the source range [default: 10000].
  --number=<n>   Timing repetitions per case [default: 100].
  --case=<name>  Only run the named case, may be repeated.
  --list         List the case names and exit.
"""

def isEven(n):
    return n % 2 == 0

def square(x):
    return x * x

def inc(x):
    return x + 1

def even_square_inc_loop(nums):
    out = []
    for n in nums:
        if isEven(n):
            out.append(inc(square(n)))
    return out

def even_square_inc_comprehension(nums):
    return [inc(square(n)) for n in nums if isEven(n)]

def even_square_inc_builtins(nums):
    return list(map(inc, map(square, filter(isEven, nums))))


even_square_inc = compose(filtering(isEven), mapping(square), mapping(inc))

def even_square_inc_transduce(nums):
    return transduce(even_square_inc, appending, START, nums)

def even_square_inc_sequence(nums):
    return list(sequence(even_square_inc, nums))


CASES = {
    'loop': even_square_inc_loop,
    'comprehension': even_square_inc_comprehension,
    'builtins': even_square_inc_builtins,
    'transduce': even_square_inc_transduce,
    'sequence': even_square_inc_sequence,
}

def performance_compare(cases, case_args=[], timeit_kwargs={}):
    """
    Times each (name, fn) case called with case_args. Returns rows of
    (name, time, scale) where scale is relative to the fastest case.
    """
    results = {}
    for name, case in cases:
        results[name] = timeit.timeit(partial(case, *case_args), **timeit_kwargs)
    lowest = min(results.values())
    return [(name, time, "%.2f" % (time / lowest)) for (name, time) in results.items()]

def select_cases(names):
    if not names:
        return list(CASES.items())
    unknown = [name for name in names if name not in CASES]
    if unknown:
        raise ValueError("Unknown case: %s" % ", ".join(unknown))
    return [(name, CASES[name]) for name in names]

def bench_ui(argv):
    args = docopt(BENCH_USAGE, argv)
    if args['--list']:
        for name in CASES:
            print(name)
        return 0
    try:
        size = int(args['--size'])
        number = int(args['--number'])
        cases = select_cases(args['--case'])
    except ValueError as e:
        print(e, file=sys.stderr)
        return 1
    nums = range(size)
    expected = even_square_inc_loop(nums)
    for name, case in cases:
        if case(nums) != expected:
            print("case %s disagrees with loop" % name, file=sys.stderr)
            return 1
    table = performance_compare(cases, case_args=[nums], timeit_kwargs={'number': number})
    print(tabulate(table, headers=['case', 'time', 'scale']))
    return 0

def main():
    exit(bench_ui(sys.argv[1:]))
