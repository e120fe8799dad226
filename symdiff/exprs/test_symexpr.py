#!/usr/bin/env python3

import unittest
import sys
import io
import os.path as op
import pickle
import shutil
import tempfile
from contextlib import redirect_stdout

import numpy as np
import sympy as sp

from testutils import SymdiffTestCase, slowtest
from .symexpr import Expression
from .symexpr import render, differentiate, evaluate, simplify
from .basics import Constant, Variable, Sum, Product, Power
from .trig import Sin, Cos


def _random_tree(rng, depth, trig=False, exponents=(0, 1, 2, 3)):
    r"""Build a random expression tree of at most the given depth.

    Powers only get constant exponents from `exponents`.
    """
    if depth == 0 or rng.rand() < 0.2:
        if rng.rand() < 0.5:
            return Constant([0, 1, -1, 2, 0.5, 3][rng.randint(6)])
        return Variable(['x', 'y'][rng.randint(2)])
    kinds = ['sum', 'product', 'power']
    if trig:
        kinds += ['sin', 'cos']
    kind = kinds[rng.randint(len(kinds))]
    sub = lambda: _random_tree(rng, depth-1, trig=trig, exponents=exponents)
    if kind == 'sum':
        return Sum(sub(), sub())
    if kind == 'product':
        return Product(sub(), sub())
    if kind == 'power':
        return Power(sub(), Constant(exponents[rng.randint(len(exponents))]))
    if kind == 'sin':
        return Sin(sub())
    return Cos(sub())


_POINTS = [
    {'x': 0.3, 'y': -1.2},
    {'x': -1.7, 'y': 0.9},
    {'x': 1.1, 'y': 2.0},
    {'x': 0.0, 'y': 0.0},
]


class TestExpression(SymdiffTestCase):
    def test_incomplete_subclass(self):
        class _NoSimplify(Expression):
            def _expr_str(self): return "n"
            def _diff(self, name): return Constant(0)
            def _eval(self, bindings, ctx): return ctx.convert(0)
            def to_sympy(self): return sp.Integer(0)
        with self.assertRaises(TypeError):
            _NoSimplify()

    def test_repr(self):
        x = Variable('x')
        self.assertEqual(repr(Sum(x, 1)), "<Sum((x+1))>")
        self.assertEqual(repr(x), "<Variable(x)>")
        self.assertEqual(str(Product(x, Sin(x))), "(x*sin(x))")
        self.assertEqual(render(Power(x, 2)), "x^2")

    def test_children_must_be_expressions(self):
        with self.assertRaises(TypeError):
            Sum(Variable('x'), "y")
        with self.assertRaises(TypeError):
            Sin(None)

    def test_immutable(self):
        x = Variable('x')
        expr = Sum(x, 1)
        with self.assertRaises(AttributeError):
            expr.a = Constant(2)
        with self.assertRaises(AttributeError):
            del expr.b
        self.assertIs(expr.a, x)

    def test_equality(self):
        x, y = Variable('x'), Variable('y')
        self.assertEqual(Sum(x, Product(2, y)), Sum(x, Product(2.0, y)))
        self.assertNotEqual(Sum(x, y), Sum(y, x))
        self.assertNotEqual(Sum(x, y), Product(x, y))
        self.assertNotEqual(Sin(x), Cos(x))
        self.assertNotEqual(Constant(1), 1)
        self.assertEqual(len({Sum(x, y), Sum(x, y), Sum(y, x)}), 2)

    def test_traverse_tree(self):
        x, y = Variable('x'), Variable('y')
        expr = Sum(x, Product(2, y))
        nodes = list(expr.traverse_tree(include_root=True))
        self.assertEqual([key for _, key, _ in nodes], ["", "a", "b", "a", "b"])
        self.assertEqual([len(parents) for parents, _, _ in nodes], [0, 1, 1, 2, 2])
        self.assertIs(nodes[2][2], expr.b)
        self.assertEqual(len(list(expr.traverse_tree())), 4)

    def test_print_tree(self):
        x, y = Variable('x'), Variable('y')
        expr = Sum(x, Product(2, y))
        out = io.StringIO()
        with redirect_stdout(out):
            expr.print_tree()
        self.assertEqual(out.getvalue().splitlines(), [
            "root [add] <Sum>",
            ". a [x] <Variable>",
            ". b [mult] <Product>",
            ". . a [const (2)] <Constant>",
            ". . b [y] <Variable>",
        ])

    def test_variables(self):
        x, y = Variable('x'), Variable('y')
        expr = Sum(y, Sin(Product(x, y)))
        self.assertEqual(expr.variables(), ['x', 'y'])
        self.assertTrue(expr.depends_on('x'))
        self.assertTrue(expr.depends_on(y))
        self.assertFalse(expr.depends_on('z'))
        self.assertEqual(Constant(1).variables(), [])

    def test_operators(self):
        x, y = Variable('x'), Variable('y')
        self.assertEqual(x*x + 1, Sum(Product(x, x), Constant(1)))
        self.assertEqual(1 + x, Sum(Constant(1), x))
        self.assertEqual(x - y, Sum(x, Product(y, Constant(-1))))
        self.assertEqual(2 - x, Sum(Constant(2), Product(x, Constant(-1))))
        self.assertEqual(3 * x, Product(Constant(3), x))
        self.assertEqual(x / 2, Product(x, Power(Constant(2), Constant(-1))))
        self.assertEqual(1 / x, Product(Constant(1), Power(x, Constant(-1))))
        self.assertEqual(x ** 2, Power(x, Constant(2)))
        self.assertEqual(2 ** x, Power(Constant(2), x))
        self.assertEqual(-x, Product(x, Constant(-1)))
        self.assertIs(+x, x)
        with self.assertRaises(TypeError):
            x + "y"

    def test_free_functions(self):
        x = Variable('x')
        expr = Product(x, x)
        self.assertEqual(differentiate(expr, x), expr.diff(x))
        self.assertEqual(evaluate(expr, {'x': 3.0}), 9.0)
        self.assertEqual(simplify(Sum(expr, 0)), expr)
        self.assertEqual(evaluate(Constant(3.0), {}), 3.0)

    def test_higher_derivatives(self):
        x = Variable('x')
        expr = Power(x, 3)
        self.assertIs(expr.diff(x, 0), expr)
        self.assertEqual(expr.diff(x, 2).evaluate({'x': 2.0}), 12.0)
        self.assertEqual(expr.diff(x, 3).evaluate({'x': 5.0}), 6.0)
        self.assertEqual(expr.diff(x, 4).simplify(), Constant(0))
        with self.assertRaises(ValueError):
            expr.diff(x, -1)

    def test_structural_sharing(self):
        x, y = Variable('x'), Variable('y')
        expr = Product(Sin(x), y)
        d = expr.diff(x)
        self.assertIs(d.a.b, expr.b)
        self.assertIs(d.b.a, expr.a)
        self.assertEqual(expr, Product(Sin(x), y))

    def test_evaluation_is_repeatable(self):
        x, y = Variable('x'), Variable('y')
        expr = Sum(Product(x, y), Cos(x))
        bindings = {'x': 0.5, 'y': 2.0}
        first = expr.evaluate(bindings)
        expr.evaluate({'x': 10.0, 'y': -3.0})
        self.assertEqual(expr.evaluate(bindings), first)
        self.assertEqual(bindings, {'x': 0.5, 'y': 2.0})

    def test_pickle(self):
        x = Variable('x')
        expr = Sum(Product(x, Sin(x), name='foo'), Power(x, 0.5))
        restored = pickle.loads(pickle.dumps(expr))
        self.assertIsType(restored, Sum)
        self.assertEqual(restored, expr)
        self.assertEqual(restored.a.name, "foo")
        self.assertEqual(restored.evaluate({'x': 2.0}), expr.evaluate({'x': 2.0}))

    def test_save_load(self):
        tmpdir = tempfile.mkdtemp()
        try:
            x = Variable('x')
            expr = Product(Cos(x), Power(Sum(x, 1), -1))
            fname = op.join(tmpdir, "sub", "expr")
            expr.save(fname, verbose=False)
            self.assertTrue(op.isfile(fname + ".npy"))
            restored = Expression.load(fname + ".npy")
            self.assertEqual(restored, expr)
            with self.assertRaises(RuntimeError):
                expr.save(fname, verbose=False)
            Constant(1).save(fname, overwrite=True, verbose=False)
            self.assertEqual(Expression.load(fname + ".npy"), Constant(1))
        finally:
            shutil.rmtree(tmpdir)

    def test_latex(self):
        x = Variable('x')
        self.assertEqual(Power(x, 2).latex(), "x^{2}")
        self.assertEqual(Constant(0.5).to_sympy(), sp.Float(0.5))
        self.assertEqual(Constant(3).to_sympy(), sp.Integer(3))
        self.assertEqual(Constant(float('inf')).to_sympy(), sp.oo)


class TestSimplifyProperties(SymdiffTestCase):
    def _check_idempotence(self, seed, count, depth):
        rng = np.random.RandomState(seed)
        for _ in range(count):
            tree = _random_tree(rng, depth, trig=True)
            once = tree.simplify()
            twice = once.simplify()
            self.assertEqual(twice, once)
            self.assertEqual(twice.str(), once.str())

    def _check_soundness(self, seed, count, depth):
        rng = np.random.RandomState(seed)
        for _ in range(count):
            tree = _random_tree(rng, depth)
            simplified = tree.simplify()
            for bindings in _POINTS:
                value = tree.evaluate(bindings)
                if not np.isfinite(value):
                    # e.g. 0*inf in the original tree
                    continue
                self.assertClose(simplified.evaluate(bindings), value)

    def test_idempotence(self):
        self._check_idempotence(seed=1, count=100, depth=4)

    def test_soundness(self):
        self._check_soundness(seed=2, count=100, depth=4)

    def test_derivatives_simplify_soundly(self):
        rng = np.random.RandomState(3)
        for _ in range(30):
            tree = _random_tree(rng, 3, exponents=(1, 2, 3))
            d = tree.diff('x')
            for bindings in _POINTS[:3]:
                self.assertClose(d.simplify().evaluate(bindings),
                                 d.evaluate(bindings))

    @slowtest
    def test_idempotence_deep(self):
        self._check_idempotence(seed=4, count=2000, depth=7)

    @slowtest
    def test_soundness_deep(self):
        self._check_soundness(seed=5, count=2000, depth=6)


class TestDerivativesAgainstSympy(SymdiffTestCase):
    def _check(self, tree):
        X, Y = sp.Symbol('x'), sp.Symbol('y')
        for var, sym in (('x', X), ('y', Y)):
            expected = sp.diff(tree.to_sympy(), sym)
            d = tree.diff(var)
            for bindings in _POINTS[:3]:
                value = float(expected.subs({X: bindings['x'], Y: bindings['y']}))
                self.assertClose(d.evaluate(bindings), value,
                                 rel_tol=1e-9, abs_tol=1e-9)

    def test_examples(self):
        x, y = Variable('x'), Variable('y')
        self._check(Product(x, Sin(Product(x, y))))
        self._check(Power(Sum(Cos(x), Power(y, 2)), 3))
        self._check(Product(Sin(x), Power(Sum(Power(x, 2), 1), -1)))
        self._check(Cos(Cos(Sum(x, Product(2, y)))))

    def test_random_trees(self):
        rng = np.random.RandomState(6)
        for _ in range(25):
            self._check(_random_tree(rng, 3, trig=True, exponents=(1, 2, 3)))


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
