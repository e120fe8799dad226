#!/usr/bin/env python3

import unittest
import sys

from mpmath import mp

from testutils import SymdiffTestCase
from .numutils import isclose


class TestIsclose(SymdiffTestCase):
    def test_float_defaults(self):
        self.assertTrue(isclose(1.0, 1.0))
        self.assertTrue(isclose(1.0, 1.0 + 1e-12))
        self.assertFalse(isclose(1.0, 1.001))
        self.assertFalse(isclose(0.0, 1e-14))

    def test_float_tolerances(self):
        self.assertTrue(isclose(1.0, 1.001, rel_tol=1e-2))
        self.assertTrue(isclose(0.0, 1e-14, abs_tol=1e-12))
        self.assertFalse(isclose(0.0, 1e-10, abs_tol=1e-12))

    def test_float_non_finite(self):
        inf, nan = float('inf'), float('nan')
        self.assertTrue(isclose(inf, inf))
        self.assertTrue(isclose(-inf, -inf))
        self.assertFalse(isclose(inf, -inf))
        self.assertFalse(isclose(inf, 1e308))
        self.assertFalse(isclose(1.0, inf, rel_tol=1.0))
        self.assertFalse(isclose(nan, nan))
        self.assertFalse(isclose(nan, 1.0, abs_tol=1e300))

    def test_mp(self):
        with mp.workdps(30):
            two = mp.sqrt(2)**2
            self.assertTrue(isclose(two, 2, use_mp=True))
            near = mp.mpf(1) + mp.mpf('1e-28')
            self.assertFalse(isclose(mp.mpf(1), near, use_mp=True))
            self.assertTrue(isclose(mp.mpf(1), near, rel_tol=mp.mpf('1e-25'),
                                    use_mp=True))

    def test_mp_non_finite(self):
        self.assertTrue(isclose(mp.inf, mp.inf, use_mp=True))
        self.assertFalse(isclose(mp.inf, mp.mpf(1), use_mp=True))
        self.assertFalse(isclose(mp.nan, mp.nan, use_mp=True))


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
