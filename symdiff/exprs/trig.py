r"""@package symdiff.exprs.trig

Trigonometric expression nodes.

Both Sin and Cos wrap an arbitrary argument expression and apply the chain
rule when differentiated. Arguments are in radians.

@b Examples

```
    x = Variable('x')
    f = sin(2 * x)
    f.diff(x).evaluate({'x': 0.0})   # 2.0
```
"""

import sympy as sp

from .basics import Constant, Product
from .builders import negate
from .symexpr import Expression


__all__ = [
    "Sin",
    "Cos",
    "sin",
    "cos",
]


class _TrigExpression(Expression):
    r"""Common parts of the trigonometric functions of one argument."""

    ## Function name used for rendering.
    _fname = None

    def __init__(self, value, name=None):
        super(_TrigExpression, self).__init__(value=value,
                                              name=name or self._fname)

    def _expr_str(self):
        return "%s(%s)" % (self._fname, self.value.str())

    def _simplify(self):
        value = self.value.simplify()
        expr = type(self)(value, name=self.name)
        if isinstance(value, Constant):
            return Constant(expr.evaluate())
        return expr


class Sin(_TrigExpression):
    r"""Sine of an expression, \f$ f = \sin(u) \f$."""
    _fname = "sin"

    def _diff(self, name):
        return Product(self.value._diff(name), Cos(self.value))

    def _eval(self, bindings, ctx):
        return ctx.sin(self.value._eval(bindings, ctx))

    def to_sympy(self):
        return sp.sin(self.value.to_sympy())


class Cos(_TrigExpression):
    r"""Cosine of an expression, \f$ f = \cos(u) \f$."""
    _fname = "cos"

    def _diff(self, name):
        return Product(negate(self.value._diff(name)), Sin(self.value))

    def _eval(self, bindings, ctx):
        return ctx.cos(self.value._eval(bindings, ctx))

    def to_sympy(self):
        return sp.cos(self.value.to_sympy())


def sin(expr):
    r"""Convenience constructor for Sin accepting numbers too."""
    return Sin(expr)


def cos(expr):
    r"""Convenience constructor for Cos accepting numbers too."""
    return Cos(expr)
