r"""@package symdiff.newton

Newton's method for finding roots of expressions in one variable.

The update step is built symbolically once using exprs.roots.euler() and then
evaluated repeatedly. All other variables of the expression are kept fixed at
the values given in `bindings`.

@b Examples

```
    x = Variable('x')
    res = newton(x**2 - 2, x, x0=1.0)
    print(res.x, res.steps)
```
"""

import numpy as np

from .exprs.common import variable_name
from .exprs.roots import euler
from .numutils import NumericalError


__all__ = [
    "newton",
    "newton_iterates",
    "NewtonResult",
    "NoConvergence",
    "StepLimitExceeded",
]


class NoConvergence(Exception):
    r"""Base for exceptions indicating failed convergence of Newton steps."""
    pass


class StepLimitExceeded(NoConvergence):
    r"""Raised when convergence not achieved within the step count limit."""
    pass


class NewtonResult(object):
    r"""Result of a converged newton() search."""
    # pylint: disable=too-few-public-methods

    def __init__(self, x, steps, history):
        ## The approximated root.
        self.x = x
        ## Number of Newton steps taken.
        self.steps = steps
        ## List of all iterates, starting with the initial guess.
        self.history = history

    def __repr__(self):
        return "<NewtonResult(x=%r, steps=%d)>" % (self.x, self.steps)


def newton_iterates(expr, variable, x0, bindings=None, use_mp=False, dps=None):
    r"""Generator yielding the initial guess and all subsequent Newton iterates.

    No convergence test is done, i.e. the generator never stops by itself.

    @param expr
        Expression to find a root of.
    @param variable
        Variable (or its name) to solve for.
    @param x0
        Initial guess.
    @param bindings
        Values of any further variables in `expr`.
    @param use_mp
        Whether to evaluate using `mpmath` arbitrary precision arithmetics.
    @param dps
        Decimal places for `mpmath` computations.
    """
    name = variable_name(variable)
    step = euler(expr, name).evaluator(use_mp=use_mp, dps=dps)
    values = dict(bindings) if bindings is not None else dict()
    x = x0
    while True:
        yield x
        values[name] = x
        x = step(values)


def newton(expr, variable, x0, bindings=None, steps=50, atol=1e-12, rtol=0.0,
           use_mp=False, dps=None, verbose=False):
    r"""Find a root of an expression using Newton's method.

    @param expr
        Expression to find a root of.
    @param variable
        Variable (or its name) to solve for.
    @param x0
        Initial guess.
    @param bindings
        Values of any further variables in `expr`. These stay fixed.
    @param steps
        Maximum number of Newton steps to take. Default is `50`.
    @param atol
        Absolute tolerance. We stop when a step changes the iterate by at most
        ``max(atol, rtol*abs(x))``. Default is `1e-12`.
    @param rtol
        Relative tolerance. Default is `0`.
    @param use_mp
        Whether to evaluate using `mpmath` arbitrary precision arithmetics.
    @param dps
        Decimal places for `mpmath` computations.
    @param verbose
        Whether to print each iterate. Default is `False`.

    @return NewtonResult with the approximated root.

    @b Raises

    `StepLimitExceeded` if the iterates did not converge within `steps`
    steps and `NumericalError` if an iterate is infinite or NaN (e.g. due to
    a vanishing derivative).
    """
    iterates = newton_iterates(expr, variable, x0, bindings=bindings,
                               use_mp=use_mp, dps=dps)
    history = [next(iterates)]
    for i in range(1, steps+1):
        x = next(iterates)
        history.append(x)
        if verbose:
            print("Newton step %d: %s = %r" % (i, variable_name(variable), x))
        if not np.isfinite(float(x)):
            raise NumericalError("Newton step %d produced %r." % (i, x))
        if abs(x - history[-2]) <= max(atol, rtol * abs(x)):
            return NewtonResult(x, i, history)
    raise StepLimitExceeded("No convergence within %d steps." % steps)
