#!/usr/bin/env python3
r"""@package projectile

Find the launch angle maximizing the range of a projectile.

A projectile is launched from height `h` with speed `s` at angle `a`. Its
flight time is the positive root of `-9.8 t^2 + s sin(a) t + h` and the
horizontal distance travelled is `s cos(a) t`. The optimal angle is a root of
the derivative of the distance w.r.t. `a`, which is found here using Newton
steps built by symdiff.exprs.euler().

Usage:

    ./scripts/projectile.py [-v] [-mp] [-steps N]
"""

import sys
import os.path as op
import logging

sys.path.append(op.realpath(op.join(__file__, op.pardir, op.pardir)))

from symdiff.exprs import Constant, Variable, Product, Sin, Cos
from symdiff.exprs import euler, quadratic


def _get_option(name, default, argv=None):
    r"""Return the value following `name` in the command line arguments.

    If `name` is not present or is the last argument, `default` is returned.
    """
    if argv is None:
        argv = sys.argv
    try:
        idx = argv.index(name)
    except ValueError:
        return default
    if idx + 1 >= len(argv):
        return default
    return argv[idx+1]


def distance_derivative():
    r"""Build the derivative of the travelled distance w.r.t. the angle `a`."""
    h, s, a = Variable('h'), Variable('s'), Variable('a')
    time = quadratic(Constant(-9.8), Product(s, Sin(a)), h)
    distance = Product(s, Product(Cos(a), time))
    return distance.diff(a)


def main():
    if '-v' in sys.argv or '-verbose' in sys.argv:
        logging.getLogger().setLevel(logging.INFO)
    use_mp = '-mp' in sys.argv
    steps = int(_get_option('-steps', 10))
    slope = distance_derivative()
    logging.info("Slope expression has %d nodes.",
                 len(list(slope.traverse_tree(include_root=True))))
    step = euler(slope, 'a')
    values = {'h': 1.5, 's': 1.0}
    z = 0.5
    for _ in range(steps):
        print(z)
        values['a'] = z
        z = step.evaluate(values, use_mp=use_mp)


if __name__ == "__main__":
    main()
