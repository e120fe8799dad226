r"""@package symdiff.exprs.roots

Expression constructors for finding roots numerically.

The functions here do not solve anything themselves. They build expressions
that, when evaluated, produce a root (quadratic()) or the next approximation
of a root (euler()). See symdiff.newton for a function repeatedly evaluating
the latter.

@b Examples

```
    x = Variable('x')
    step = euler(x**2 - 2, x)
    z = 1.0
    for _ in range(6):
        z = step.evaluate({'x': z})
    # z is now sqrt(2) to machine precision
```
"""

from .basics import Constant, Variable, Sum, Product, Power
from .builders import negate, invert


__all__ = [
    "euler",
    "quadratic",
]


def euler(e, v):
    r"""Build one Newton step `v - e/(de/dv)` for finding a root of `e`.

    Args:
        e:  Expression to find a root of.
        v:  Variable (or variable name) to solve for.

    Evaluating the result with the current approximation bound to `v` gives
    the next approximation.
    """
    if isinstance(v, str):
        v = Variable(v)
    return Sum(v, negate(Product(e, invert(e.diff(v)))))


def quadratic(a, b, c):
    r"""Build one root of `a x^2 + b x + c`.

    The returned expression is
    \f[
        \frac{-b - \sqrt{b^2 - 4ac}}{2a}.
    \f]
    Only this one branch is constructed. Arguments may be expressions or
    numbers.
    """
    return Product(
        Sum(
            negate(b),
            negate(Power(
                Sum(
                    Power(b, Constant(2)),
                    Product(Constant(-4), Product(a, c)),
                ),
                Constant(0.5),
            )),
        ),
        invert(Product(Constant(2), a)),
    )
