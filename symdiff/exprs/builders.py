r"""@package symdiff.exprs.builders

Free functions composing expression trees.

These functions keep the set of node types small by expressing subtraction,
negation, division and inversion in terms of Sum, Product and Power:

    * ``negate(e)  -> Product(e, -1)``
    * ``invert(e)  -> Power(e, -1)``
    * ``sub(a, b)  -> Sum(a, negate(b))``
    * ``div(a, b)  -> Product(a, invert(b))``

No simplification is performed. Plain numbers may be passed for any argument
and are converted to Constant expressions.
"""

from .basics import Constant, Sum, Product, Power


__all__ = [
    "add",
    "sub",
    "mul",
    "div",
    "pow",
    "negate",
    "invert",
]


# pylint: disable=redefined-builtin


def negate(e):
    r"""Build `-e` as `e * (-1)`."""
    return Product(e, Constant(-1))


def invert(e):
    r"""Build `1/e` as `e ^ (-1)`."""
    return Power(e, Constant(-1))


def add(a, b):
    return Sum(a, b)


def sub(a, b):
    return Sum(a, negate(b))


def mul(a, b):
    return Product(a, b)


def div(a, b):
    return Product(a, invert(b))


def pow(a, b):
    return Power(a, b)
