"""Reference values of test problems."""

from collections import namedtuple


# f0: objective at the starting point, x: known solution, fx: optimal value.
ExpectedResult = namedtuple("ExpectedResult", ["f0", "x", "fx"])
