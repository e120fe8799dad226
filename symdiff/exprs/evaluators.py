r"""@package symdiff.exprs.evaluators

Callable evaluator objects for expressions.

An evaluator is a light-weight object taking a *snapshot* of an expression
together with an evaluation mode (floating point or `mpmath`). It can be
called with variable bindings and additionally evaluates derivatives of the
expression, whose trees are built once on first use and cached.
"""

from .common import variable_name


__all__ = [
    "Evaluator",
]


class Evaluator(object):
    r"""Evaluate an expression and its derivatives.

    Bindings can be given as a mapping, as keyword arguments or both, e.g.

    \code
        ev = (x * y).evaluator()
        ev({'x': 2.0}, y=3.0)        # 6.0
        ev.diff('x', y=3.0)          # 3.0
        f = ev.function('x', y=3.0)
        f(2.0)                       # 6.0
    \endcode
    """
    def __init__(self, expr, use_mp=False, dps=None):
        r"""Create an evaluator for a given expression.

        @param expr
            The expression to evaluate.
        @param use_mp
            Whether to use `mpmath` arbitrary precision arithmetics.
        @param dps
            Decimal places to use for `mpmath` computations. If `None`, the
            current global setting is used at evaluation time.
        """
        self._expr = expr
        ## Boolean indicating if computation should use `mpmath` (if `True`)
        ## or floating point operations.
        self.use_mp = use_mp
        ## Decimal places for `mpmath` computations.
        self.dps = dps
        self._derivs = dict()

    @property
    def expr(self):
        r"""Expression evaluated by this evaluator."""
        return self._expr

    @staticmethod
    def _bindings(bindings, kwargs):
        if not kwargs:
            return bindings if bindings is not None else dict()
        result = dict(bindings) if bindings is not None else dict()
        result.update(kwargs)
        return result

    def __call__(self, bindings=None, **kwargs):
        r"""Evaluate the expression for the given variable values."""
        return self._expr.evaluate(self._bindings(bindings, kwargs),
                                   use_mp=self.use_mp, dps=self.dps)

    def derivative(self, v, n=1):
        r"""Return the (cached) tree of the n'th derivative w.r.t. `v`."""
        key = (variable_name(v), n)
        try:
            return self._derivs[key]
        except KeyError:
            expr = self._derivs[key] = self._expr.diff(key[0], n)
            return expr

    def diff(self, v, bindings=None, n=1, **kwargs):
        r"""Evaluate the n'th derivative w.r.t. `v` for the given values."""
        return self.derivative(v, n).evaluate(self._bindings(bindings, kwargs),
                                              use_mp=self.use_mp, dps=self.dps)

    def function(self, v, n=0, bindings=None, **kwargs):
        r"""Return a callable of one argument for the n'th derivative.

        The returned function takes the value of variable `v`. All other
        variables are fixed to the values given here.
        """
        name = variable_name(v)
        values = dict(self._bindings(bindings, kwargs))
        expr = self.derivative(name, n)
        use_mp, dps = self.use_mp, self.dps
        def f(x):
            values[name] = x
            return expr.evaluate(values, use_mp=use_mp, dps=dps)
        return f
