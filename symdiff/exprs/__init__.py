r"""@package symdiff.exprs

Expression system for composing functions symbolically and differentiating,
simplifying and evaluating them.

Each expression is a tree consisting of the node types

    * basics.Constant and basics.Variable (leaves),
    * basics.Sum, basics.Product and basics.Power (arithmetics),
    * trig.Sin and trig.Cos (trigonometric functions).

Further operations such as subtraction and division are built from these by
the functions in the builders module, which are also used by the Python
operators on expressions:

~~~.py
x, y = Variable('x'), Variable('y')
f = (x - y) / x**2          # Product(Sum(x, Product(y, -1)), Power(Power(x, 2), -1))
print(f.diff(x).evaluate({'x': 1.0, 'y': 2.0}))
~~~

Trees are immutable. Derivatives (Expression.diff()) and simplified versions
(Expression.simplify()) are new trees, possibly sharing sub-trees with the
original.
"""

from .symexpr import Expression, ExpressionWarning
from .symexpr import render, differentiate, evaluate, simplify
from .basics import Constant, Variable, Sum, Product, Power
from .trig import Sin, Cos, sin, cos
from .builders import add, sub, mul, div, pow, negate, invert
from .roots import euler, quadratic
from .evaluators import Evaluator
