r"""@package symdiff.exprs.symexpr

Base of the symbolic expression system.

An expression is an immutable tree built from a small, closed set of node
types (see basics and trig). Each node type knows how to

    * render itself as text,
    * build the tree of its own derivative w.r.t. a variable,
    * evaluate itself given values for its variables, and
    * simplify itself by applying local rewrite rules bottom-up.

All four operations return new objects. Trees are never modified after
construction, which means sub-trees can safely be shared between different
expressions (e.g. the derivative of a product contains the factors of the
original product).

As a simple example, let's build \f$ f(x) = x \sin(x) \f$ and compute its
derivative:

~~~.py
x = Variable('x')
f = x * sin(x)
df = f.diff(x)
print(df)                         # ((1*sin(x))+(x*(1*cos(x))))
print(df.simplify())              # (sin(x)+(x*cos(x)))
print(df.evaluate({'x': 0.5}))    # 0.918...
~~~

Evaluation uses floating point arithmetics by default. Pass `use_mp=True` to
evaluate using `mpmath` arbitrary precision arithmetics instead.

Expressions are picklable and can be stored to disk using
Expression.save() and restored using Expression.load().
"""

from contextlib import contextmanager
from abc import ABCMeta, abstractmethod

import numpy as np
from mpmath import mp

from ..utils import save_to_file, load_from_file
from .common import is_number, variable_name, _eval_context


__all__ = [
    "Expression",
    "ExpressionWarning",
    "render",
    "differentiate",
    "evaluate",
    "simplify",
]


class ExpressionWarning(UserWarning):
    """Warning issued when expressions might not behave as expected."""
    pass


class Expression(metaclass=ABCMeta):
    """Parent class for symbolic expressions.

    Child classes represent one kind of node in an expression tree. Their
    child nodes are registered using _set_sub_exprs() and can then be
    accessed as (read-only) attributes under the keys used there.

    The methods a child has to override are:
        * _expr_str() returning the textual representation of the node
        * _diff() building the derivative tree
        * _eval() computing the numeric value
        * _simplify() building the simplified tree
        * to_sympy() converting to a SymPy expression

    Since these are abstract, a node type missing one of them cannot be
    instantiated.
    """

    def __init__(self, name=None, **sub_exprs):
        r"""Base class init for expressions.

        Args:
            name: (string, optional)
                Name for the expression. Can be useful to label expressions in
                a larger expression tree to indicate their role/meaning. By
                default, the lower case class name is used. The name is not
                taken into account when comparing expressions.
            **sub_exprs:
                Child expressions stored on this node. Plain numbers are
                converted to Constant expressions.
        """
        self._set('_name', name if name else self.__class__.__name__.lower())
        self._set('_sub_exprs', ())
        self._set_sub_exprs(**sub_exprs)

    def _set(self, attr, value):
        r"""Set an attribute bypassing the immutability check."""
        object.__setattr__(self, attr, value)

    def __setattr__(self, attr, value):
        raise AttributeError("%s objects are immutable." % type(self).__name__)

    def __delattr__(self, attr):
        raise AttributeError("%s objects are immutable." % type(self).__name__)

    def _set_sub_exprs(self, **sub_exprs):
        r"""Store child expressions under public attributes of this object."""
        items = tuple((k, self.ensure_expr(e)) for k, e in sub_exprs.items())
        for k, e in items:
            self._set(k, e)
        self._set('_sub_exprs', self._sub_exprs + items)

    @staticmethod
    def ensure_expr(expr):
        """Ensure an object is an expression, converting it if necessary.

        Numbers are converted to a `Constant`. Any other object raises a
        `TypeError`.
        """
        if isinstance(expr, Expression):
            return expr
        if is_number(expr):
            from .basics import Constant
            return Constant(expr)
        raise TypeError("Cannot use %r as an expression." % (expr,))

    @property
    def name(self):
        r"""Name given to this instance of the expression."""
        return self._name

    @property
    def nice_name(self):
        r"""More descriptive name, which may be overridden by sub classes."""
        return self._name

    @property
    def sub_exprs(self):
        r"""Tuple of `(key, expr)` pairs of the direct children."""
        return self._sub_exprs

    def traverse_tree(self, include_root=False, parents=None):
        r"""Generator that walks through a complete expression tree.

        In each iteration, the returned values represent the current node's
        parents (as a list from root to immediate parent), its key under which
        it is stored in its parent, and the node itself.

        Args:
            include_root: Whether to include the root as first item. Default
                is `False`.
            parents: Optional list of parents of the root. Normally only used
                internally for the recursion.

        @b Examples
        \code
            for parents, name, expr in root_expr.traverse_tree():
                print("-"*len(parents), name)
        \endcode

        """
        if parents is None:
            parents = []
        if include_root:
            yield parents, "", self
        parents = parents + [self]
        for key, expr in self._sub_exprs:
            yield parents, key, expr
            for node in expr.traverse_tree(include_root=False,
                                           parents=parents):
                yield node

    def print_tree(self, root_name='root', nice_names=True):
        r"""Print the whole expression tree.

        Each expression's key under which it is stored in its parent will be
        shown as well as its actual name and the class name.

        Args:
            root_name: Key name to print for the root expression.
            nice_names: Whether to use the nice more descriptive name (when
                implemented) or the usually shorter abstract names.
        """
        def _p(expr, name, parents=()):
            n = expr.nice_name if nice_names else expr.name
            print("%s%s [%s] <%s>" % (
                ". " * len(parents), name, n, type(expr).__name__
            ))
        _p(self, root_name)
        for parents, name, expr in self.traverse_tree():
            _p(expr, name, parents)

    def variables(self):
        r"""Sorted list of the names of all variables in this tree."""
        names = set()
        for _, _, expr in self.traverse_tree(include_root=True):
            names.update(expr._own_variables())
        return sorted(names)

    def _own_variables(self):
        r"""Variable names this node itself (not its children) refers to."""
        return ()

    def depends_on(self, v):
        r"""Return whether any variable of the tree is the given one."""
        return variable_name(v) in self.variables()

    def _params(self):
        r"""Tuple of non-expression data taking part in equality checks."""
        return ()

    def _key(self):
        return (type(self), self._params(),
                tuple(e for _, e in self._sub_exprs))

    def __eq__(self, other):
        if not isinstance(other, Expression):
            return NotImplemented
        return self._key() == other._key()

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(self._key())

    def save(self, filename, overwrite=False, verbose=True):
        r"""Save the expression object to disk.

        Args:
            filename: The file name to store the data in. An extension
                ``'.npy'`` will be added if not already there.
            overwrite: Whether to overwrite an existing file with the same
                name. If `False` (default) and such a file exists, a
                `RuntimeError` is raised.
            verbose: Whether to print when the file was written. Default is
                `True`.
        """
        save_to_file(
            filename, self, overwrite=overwrite, verbose=verbose,
            showname="%s [%s]" % (self.nice_name, type(self).__name__)
        )

    @classmethod
    def load(cls, filename):
        r"""Static function to load an expression object from disk."""
        return load_from_file(filename)

    def __repr__(self):
        r"""Return a string representing the whole expression tree."""
        cls = self.__class__.__name__
        return "<%s(%s)>" % (cls, self.str())

    def __str__(self):
        return self.str()

    def str(self):
        """Return the fully parenthesized textual form of the expression."""
        return self._expr_str()

    render = str

    @abstractmethod
    def _expr_str(self):
        """String representing this node.

        Child expressions should be rendered using their `str` method. For
        example, a sum would return:

            "(%s+%s)" % (self.a.str(), self.b.str())
        """
        pass

    def diff(self, v, n=1):
        r"""Build the tree of the n'th derivative w.r.t. the variable `v`.

        Args:
            v: Variable (or name of the variable) to differentiate w.r.t.
            n: Derivative order. Default is `1`. For `n=0`, the expression
                itself is returned.

        The result is not simplified. Use simplify() to remove trivial
        operations like multiplications with one.
        """
        if n < 0:
            raise ValueError("Derivative order must be non-negative, got %r." % n)
        name = variable_name(v)
        expr = self
        for _ in range(n):
            expr = expr._diff(name)
        return expr

    @abstractmethod
    def _diff(self, name):
        r"""Child classes implement this to build their derivative tree.

        `name` is the name of the variable to differentiate w.r.t.
        """
        pass

    @classmethod
    @contextmanager
    def context(cls, use_mp, dps=None):
        r"""Convenience function to be used as context manager.

        This will automatically choose the arithmetic context used for
        evaluation and configure the desired decimal places (in case of
        `mpmath` computations) and floating point error handling (in case of
        floating point computations).

        Args:
            use_mp: Whether to use `mpmath` (if `True`) or floating point
                operations.
            dps:    Decimal places to use in `mp` computations. By default,
                the current `mp.dps` setting is used.
        """
        ctx = _eval_context(use_mp)
        if use_mp:
            if dps is None:
                dps = mp.dps
            with mp.workdps(dps):
                yield ctx
        else:
            with np.errstate(all='ignore'):
                yield ctx

    def evaluate(self, bindings=None, use_mp=False, dps=None):
        r"""Compute the numeric value of the expression.

        Args:
            bindings: Mapping of variable names to values. Variables missing
                in this mapping evaluate to zero.
            use_mp: Whether to use `mpmath` arbitrary precision arithmetics.
                Default is `False`, i.e. use floating point arithmetics.
            dps: Decimal places for `mpmath` computations.

        @return A `float` if ``use_mp==False``, else an `mpmath.mpf`.

        @b Notes

        Floating point evaluation follows IEEE-754 semantics, i.e. a division
        by zero results in an infinity and a negative number raised to a
        fractional power results in NaN. No exceptions are raised in these
        cases.
        """
        if bindings is None:
            bindings = dict()
        with self.context(use_mp, dps) as ctx:
            value = self._eval(bindings, ctx)
        return value if use_mp else float(value)

    @abstractmethod
    def _eval(self, bindings, ctx):
        r"""Child classes need to implement this and compute their value here.

        `ctx` provides the functions `convert`, `power`, `sin` and `cos`
        appropriate for the current evaluation mode.
        """
        pass

    def evaluator(self, use_mp=False, dps=None):
        r"""Create a callable evaluator for this expression.

        See evaluators.Evaluator for details.
        """
        from .evaluators import Evaluator
        return Evaluator(self, use_mp=use_mp, dps=dps)

    def simplify(self):
        r"""Return a simplified but equivalent version of this expression.

        Rewrite rules are applied bottom-up, i.e. children are simplified
        first. Calling simplify() on an already simplified tree returns an
        equal tree.
        """
        return self._simplify()

    @abstractmethod
    def _simplify(self):
        r"""Child classes implement their local rewrite rules here."""
        pass

    @abstractmethod
    def to_sympy(self):
        r"""Convert the expression to a SymPy expression."""
        pass

    def latex(self):
        r"""LaTeX representation of the expression (via SymPy)."""
        import sympy as sp
        return sp.latex(self.to_sympy())

    def _binary(self, other, op, reflected=False):
        if not isinstance(other, Expression) and not is_number(other):
            return NotImplemented
        from . import builders
        f = getattr(builders, op)
        return f(other, self) if reflected else f(self, other)

    def __add__(self, other):
        return self._binary(other, 'add')

    def __radd__(self, other):
        return self._binary(other, 'add', reflected=True)

    def __sub__(self, other):
        return self._binary(other, 'sub')

    def __rsub__(self, other):
        return self._binary(other, 'sub', reflected=True)

    def __mul__(self, other):
        return self._binary(other, 'mul')

    def __rmul__(self, other):
        return self._binary(other, 'mul', reflected=True)

    def __truediv__(self, other):
        return self._binary(other, 'div')

    def __rtruediv__(self, other):
        return self._binary(other, 'div', reflected=True)

    def __pow__(self, other):
        return self._binary(other, 'pow')

    def __rpow__(self, other):
        return self._binary(other, 'pow', reflected=True)

    def __neg__(self):
        from .builders import negate
        return negate(self)

    def __pos__(self):
        return self


def render(expr):
    r"""Fully parenthesized textual form of an expression."""
    return expr.str()


def differentiate(expr, v, n=1):
    r"""Derivative tree of `expr` w.r.t. the variable `v`."""
    return expr.diff(v, n=n)


def evaluate(expr, bindings=None, use_mp=False, dps=None):
    r"""Numeric value of `expr` given variable bindings."""
    return expr.evaluate(bindings, use_mp=use_mp, dps=dps)


def simplify(expr):
    r"""Simplified version of `expr`."""
    return expr.simplify()
