r"""@package testutils

Utilities to add more features to `unittest` classes.

This module provides a custom subclass of `unittest.TestCase`, namely
SymdiffTestCase, which obeys the global configuration settings in
TestSettings. The latter can be configured by the script invoking the test
run (see `tests.py`).

This module also introduces a new decorator slowtest, which, when applied,
leads to the test being skipped on normal runs. The script starting the test
must set `TestSettings.skipslow` to `False` for the slow tests to be run.
"""

import sys
import functools
import math
import unittest
import time


__all__ = [
    "SymdiffTestCase",
    "TestSettings",
    "slowtest",
]


def slowtest(func):
    """Decorator for skipping a test if TestSettings.skipslow is true."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if TestSettings.skipslow:
            raise unittest.SkipTest("skipping slow tests")
        return func(*args, **kwargs)
    return wrapper


class SymdiffTestCase(unittest.TestCase):
    """Tweaked baseclass for unit tests.

    By deriving from this class, you:
        * Get timed individual tests (needs `verbosity=2`) if
          TestSettings.timing is true.
        * Get a few additional assertion methods for numbers and expressions.
    """
    def run(self, result=None):
        self.__result = result
        self.__prevProblems = self.__problemCount()
        return unittest.TestCase.run(self, result)

    def __problemCount(self):
        r"""Number of errors, failures and skips recorded so far."""
        result = self.__result
        return sum(len(getattr(result, attr, ()))
                   for attr in ('errors', 'failures', 'skipped'))

    def __shouldPrintTiming(self):
        r"""Return whether timing information should be printed."""
        if not TestSettings.timing:
            return False
        return self.__problemCount() == self.__prevProblems

    def setUp(self):
        self.startTime = time.time()
        self.addCleanup(self.__printTiming)

    def __printTiming(self):
        if self.__shouldPrintTiming():
            duration = time.time() - self.startTime
            print("(%.4f seconds) ... " % (duration), file=sys.stderr, end='')

    def assertIsType(self, obj, cls):
        r"""Assert that an object is exactly of a certain type."""
        self.assertIs(type(obj), cls)

    def assertRendersAs(self, expr, text):
        r"""Assert that an expression renders to the given text."""
        self.assertEqual(expr.str(), text)

    def assertClose(self, a, b, rel_tol=1e-9, abs_tol=1e-12):
        r"""Assert two numbers agree within a relative/absolute tolerance.

        Two NaN values count as equal here.
        """
        a, b = float(a), float(b)
        if math.isnan(a) and math.isnan(b):
            return
        if a == b:
            return
        if abs(a-b) > max(rel_tol * max(abs(a), abs(b)), abs_tol):
            raise self.failureException("%r != %r within rel_tol=%r, abs_tol=%r"
                                        % (a, b, rel_tol, abs_tol))

    def assertListAlmostEqual(self, a, b, places=None, delta=None):
        r"""Assert that two iterables contain (almost) the same values."""
        if places is not None and delta is not None:
            raise TypeError("Cannot use delta and places at the same time")
        if places is None and delta is None:
            places = 7
        if len(a) != len(b):
            raise self.failureException("Lists have different lengths (%d != %d)" % (len(a), len(b)))
        fails = []
        for i in range(len(a)):
            if a[i] == b[i]:
                continue
            if delta is not None:
                if abs(a[i]-b[i]) > delta:
                    fails.append(i)
            else:
                if round(abs(a[i]-b[i]), places) != 0:
                    fails.append(i)
        if fails:
            msg = "%d elements differ.\n" % len(fails)
            maxN = 9
            if len(fails) <= maxN:
                msg += "Differing elements:\n"
            else:
                msg += "First few differing elements:\n"
            msg += "\n".join(["  [{i}] {a} != {b}    (difference: {d})".format(i=i, a=a[i], b=b[i], d=(b[i]-a[i]))
                              for i in fails[:maxN]])
            raise self.failureException(msg)


class TestSettings(object):
    """Global settings for tests."""
    ## Stop test run on first fail/error.
    failfast = False
    ## Whether output is buffered.\ Just information, cannot be used to toggle output buffering.
    buffering = False
    ## Whether the timing for each test case should be printed.
    timing = False
    ## Control whether tests marked as slowtest should be skipped.
    skipslow = True
