r"""@package symdiff.numutils

Miscellaneous numerical utilities and helpers.
"""

import math

from mpmath import mp


__all__ = [
    "NumericalError",
    "isclose",
]


class NumericalError(Exception):
    r"""Exception raised for problems with numerical evaluation.

    For example, iterative methods raise this if an iterate becomes infinite
    or NaN.
    """
    pass


def isclose(a, b, rel_tol=None, abs_tol=None, use_mp=False):
    r"""Test if two numbers agree within an absolute/relative tolerance.

    For floating point comparison (i.e. if `use_mp==False`), the default
    relative tolerance is `1e-9` and the absolute one `0.0`. In `mpmath` mode,
    `mp.almosteq()` is used, which by default allows for a few ulps of the
    current working precision. Equal infinities are considered close, NaN
    values are not.
    """
    if a == b:
        return True
    if use_mp:
        return mp.almosteq(a, b, rel_eps=rel_tol, abs_eps=abs_tol)
    if rel_tol is None:
        rel_tol = 1e-9
    if abs_tol is None:
        abs_tol = 0.0
    if math.isinf(a) or math.isinf(b):
        return False
    return abs(a-b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)
