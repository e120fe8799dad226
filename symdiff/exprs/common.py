r"""@package symdiff.exprs.common

Utils used by multiple modules in symdiff.exprs.
"""

import math
import numbers

import numpy as np
from mpmath import mp


__all__ = [
    "format_number",
    "is_number",
    "variable_name",
]


def is_number(value):
    r"""Return whether `value` can be turned into a Constant expression."""
    return isinstance(value, (numbers.Real, mp.mpf))


def format_number(value):
    r"""Shortest textual form of a floating point value.

    The shortest digit string identifying the value is used. Exponential
    notation is chosen if the decimal exponent is less than `-4` or at least
    `6`, with the exponent having a sign and at least two digits. Integral
    values are printed without a trailing ``.0``. Non-finite values are
    printed as ``NaN``, ``+Inf`` and ``-Inf``, respectively.

    @b Examples

    ```
        >>> format_number(2.0), format_number(-9.8), format_number(0.5)
        ('2', '-9.8', '0.5')
        >>> format_number(123456.), format_number(1e6), format_number(1e-5)
        ('123456', '1e+06', '1e-05')
    ```
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    sci = np.format_float_scientific(value, unique=True, trim='-')
    exponent = int(sci.split('e')[1])
    if exponent < -4 or exponent >= 6:
        return sci
    return np.format_float_positional(value, unique=True, trim='-')


def variable_name(v):
    r"""Return the name of a variable given as Variable object or string."""
    if isinstance(v, str):
        return v
    name = getattr(v, 'var_name', None)
    if not isinstance(name, str):
        raise TypeError("Expected a variable or variable name, got %r." % (v,))
    return name


class _FloatContext(object):
    r"""Floating point operations with IEEE-754 semantics.

    All operations act on `numpy.float64` values, so that overflow, division
    by zero and invalid operations produce infinities and NaNs instead of
    raising exceptions (the caller is expected to silence the corresponding
    numpy warnings, see Expression.evaluate()).
    """
    # pylint: disable=too-few-public-methods
    use_mp = False
    convert = staticmethod(np.float64)
    sin = staticmethod(np.sin)
    cos = staticmethod(np.cos)
    power = staticmethod(np.power)


class _MpContext(object):
    r"""Arbitrary precision counterpart of _FloatContext based on `mpmath`.

    The power function is restricted to real results: a negative base with a
    non-integral exponent gives `mp.nan` and a zero base with a negative
    exponent gives `mp.inf`, just as in floating point mode.
    """
    # pylint: disable=too-few-public-methods
    use_mp = True
    convert = staticmethod(mp.mpf)
    sin = staticmethod(mp.sin)
    cos = staticmethod(mp.cos)

    @staticmethod
    def power(base, exponent):
        r"""Real-valued `base**exponent`."""
        if base < 0 and not mp.isint(exponent):
            return mp.nan
        if base == 0 and exponent < 0:
            return mp.inf
        return mp.power(base, exponent)


def _eval_context(use_mp):
    r"""Return the arithmetic context for the respective evaluation mode."""
    return _MpContext if use_mp else _FloatContext
