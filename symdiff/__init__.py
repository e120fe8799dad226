r"""@package symdiff

Small symbolic differentiation engine.

Expressions are built as trees (see the symdiff.exprs package), can be
differentiated symbolically, simplified, evaluated numerically and rendered
as text. The symdiff.newton module uses the symbolic derivatives to find
roots of expressions via Newton's method.
"""

from .exprs import Expression, Constant, Variable, Sum, Product, Power
from .exprs import Sin, Cos
from .exprs import render, differentiate, evaluate, simplify
