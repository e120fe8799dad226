r"""@package symdiff.exprs.basics

Leaf and arithmetic expression nodes.

There is no difference or quotient node. Subtraction and division are
expressed using Sum, Product and Power (see builders.sub() and builders.div()).
"""

import math
import warnings

import sympy as sp

from .common import format_number, is_number
from .symexpr import Expression, ExpressionWarning


__all__ = [
    "Constant",
    "Variable",
    "Sum",
    "Product",
    "Power",
]


def _is_const(expr, value):
    r"""Check whether `expr` is a Constant with exactly the given value."""
    return isinstance(expr, Constant) and expr.value == value


def _fold(expr):
    r"""Replace an expression without variables by its floating point value."""
    return Constant(expr.evaluate())


class Constant(Expression):
    r"""Represent an expression that is a constant.

    Represents an expression of the form \f$ f = c = \mathrm{const} \f$.

    The value of the constant can be accessed through the `value` property.
    """

    def __init__(self, value=0.0, name='const'):
        r"""Init function.

        Args:
            value:  The constant value. Stored as `float`.
            name:   Name of the expression (e.g. for print_tree()).
        """
        if isinstance(value, Expression) or not is_number(value):
            raise TypeError("Constant value must be a real number, got %r."
                            % (value,))
        ## The constant value this expression represents.
        self._set('_value', float(value))
        super(Constant, self).__init__(name=name)

    @property
    def value(self):
        r"""The constant value."""
        return self._value

    @property
    def nice_name(self):
        return "%s (%s)" % (self.name, format_number(self._value))

    def _params(self):
        return (self._value,)

    def _expr_str(self):
        return format_number(self._value)

    def _diff(self, name):
        return Constant(0)

    def _eval(self, bindings, ctx):
        return ctx.convert(self._value)

    def _simplify(self):
        return self

    def to_sympy(self):
        c = self._value
        if math.isnan(c):
            return sp.nan
        if math.isinf(c):
            return sp.oo if c > 0 else -sp.oo
        if c.is_integer():
            return sp.Integer(int(c))
        return sp.Float(c)


class Variable(Expression):
    """A named unknown, resolved at evaluation time.

    Two variables with the same name are equal. The name is available as the
    `var_name` property.
    """

    def __init__(self, var_name, name=None):
        r"""Init function.

        Args:
            var_name:   Name of the variable, e.g. ``'x'``.
            name:       Name of the expression (e.g. for print_tree()).
                        Defaults to `var_name`.
        """
        if not isinstance(var_name, str):
            raise TypeError("Variable name must be a string, got %r."
                            % (var_name,))
        self._set('_var_name', var_name)
        super(Variable, self).__init__(name=name if name else var_name)

    @property
    def var_name(self):
        r"""Name identifying this variable."""
        return self._var_name

    def _params(self):
        return (self._var_name,)

    def _own_variables(self):
        return (self._var_name,)

    def _expr_str(self):
        return self._var_name

    def _diff(self, name):
        return Constant(1) if name == self._var_name else Constant(0)

    def _eval(self, bindings, ctx):
        # Unbound variables are silently treated as zero.
        return ctx.convert(bindings.get(self._var_name, 0.0))

    def _simplify(self):
        return self

    def to_sympy(self):
        return sp.Symbol(self._var_name)


class Sum(Expression):
    r"""Sum of two expressions.

    Represents an expression of the form \f$ f = a + b \f$.
    """

    def __init__(self, a, b, name='add'):
        r"""Init function.

        Args:
            a:      First summand.
            b:      Second summand.
            name:   Name of the expression (e.g. for print_tree()).
        """
        super(Sum, self).__init__(a=a, b=b, name=name)

    def _expr_str(self):
        return "(%s+%s)" % (self.a.str(), self.b.str())

    def _diff(self, name):
        return Sum(self.a._diff(name), self.b._diff(name))

    def _eval(self, bindings, ctx):
        return self.a._eval(bindings, ctx) + self.b._eval(bindings, ctx)

    def _simplify(self):
        a = self.a.simplify()
        b = self.b.simplify()
        if _is_const(a, 0):
            return b
        if _is_const(b, 0):
            return a
        if isinstance(a, Constant) and isinstance(b, Constant):
            return _fold(Sum(a, b))
        return Sum(a, b)

    def to_sympy(self):
        return sp.Add(self.a.to_sympy(), self.b.to_sympy())


class Product(Expression):
    r"""Multiply two expressions.

    Represents an expression of the form \f$ f = a b \f$.
    """

    def __init__(self, a, b, name='mult'):
        r"""Init function.

        Args:
            a:      First factor.
            b:      Second factor.
            name:   Name of the expression (e.g. for print_tree()).
        """
        super(Product, self).__init__(a=a, b=b, name=name)

    def _expr_str(self):
        return "(%s*%s)" % (self.a.str(), self.b.str())

    def _diff(self, name):
        a, b = self.a, self.b
        return Sum(Product(a._diff(name), b), Product(a, b._diff(name)))

    def _eval(self, bindings, ctx):
        return self.a._eval(bindings, ctx) * self.b._eval(bindings, ctx)

    def _simplify(self):
        a = self.a.simplify()
        b = self.b.simplify()
        if _is_const(a, 0):
            return a
        if _is_const(b, 0):
            return b
        if _is_const(a, 1):
            return b
        if _is_const(b, 1):
            return a
        if isinstance(a, Constant) and isinstance(b, Constant):
            return _fold(Product(a, b))
        return Product(a, b)

    def to_sympy(self):
        return sp.Mul(self.a.to_sympy(), self.b.to_sympy())


class Power(Expression):
    r"""Raise one expression to the power of another.

    Represents an expression of the form \f$ f = b^e \f$, where both the base
    \f$ b \f$ and the exponent \f$ e \f$ may be arbitrary expressions.

    @b Notes

    The derivative is computed as \f$ e\, b'\, b^{e-1} \f$, i.e. the exponent
    is treated as constant. If the exponent depends on the variable, the
    result lacks the \f$ \ln(b)\, e'\, b^e \f$ term and an ExpressionWarning
    is issued.

    Simplification replaces powers with base `0` or `1` by the base itself,
    even for negative or non-constant exponents.
    """

    def __init__(self, base, exponent, name='pow'):
        r"""Init function.

        Args:
            base:       The base.
            exponent:   The exponent.
            name:       Name of the expression (e.g. for print_tree()).
        """
        super(Power, self).__init__(base=base, exponent=exponent, name=name)

    def _expr_str(self):
        return "%s^%s" % (self.base.str(), self.exponent.str())

    def _diff(self, name):
        base, exponent = self.base, self.exponent
        if exponent.depends_on(name):
            warnings.warn(
                "Exponent of %s depends on %r. Its derivative is computed as "
                "if the exponent were constant." % (self.str(), name),
                ExpressionWarning
            )
        return Product(
            exponent,
            Product(base._diff(name), Power(base, Sum(exponent, Constant(-1))))
        )

    def _eval(self, bindings, ctx):
        return ctx.power(self.base._eval(bindings, ctx),
                         self.exponent._eval(bindings, ctx))

    def _simplify(self):
        base = self.base.simplify()
        exponent = self.exponent.simplify()
        if _is_const(exponent, 0):
            return Constant(1)
        if _is_const(exponent, 1):
            return base
        if _is_const(base, 0) or _is_const(base, 1):
            return base
        if isinstance(base, Constant) and isinstance(exponent, Constant):
            return _fold(Power(base, exponent))
        return Power(base, exponent)

    def to_sympy(self):
        return sp.Pow(self.base.to_sympy(), self.exponent.to_sympy())
