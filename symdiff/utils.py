r"""@package symdiff.utils

General utilities for simplifying certain tasks in Python.
"""

from tempfile import NamedTemporaryFile
import importlib.util
import os
import os.path as op

import numpy as np


__all__ = [
    "import_file_as_module",
    "lmap",
    "save_to_file",
    "load_from_file",
]


def import_file_as_module(fname, mname='loaded_module'):
    r"""Given a filename, load it as a Python module.

    Any classes or functions defined in the file can then be retrieved as
    attributes from the returned module. This is used e.g. to access the
    example scripts, which are not part of the package.
    """
    spec = importlib.util.spec_from_file_location(mname, fname)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def lmap(func, *iterables):
    r"""Implementation of `map` that returns a list instead of a generator."""
    return list(map(func, *iterables))


def save_to_file(filename, data, overwrite=False, verbose=True,
                 showname='data', mkpath=True):
    r"""Save an object to disk.

    This uses `numpy.save()` to store an object in a file. Use
    load_from_file() to restore the data afterwards.

    This operation is atomic for ``overwrite=True``. This means that any
    failure during saving will leave the original file untouched.

    @param filename
        The file name to store the data in. An extension ``'.npy'`` will be
        added if not already there.
    @param overwrite
        Whether to overwrite an existing file with the same name. If `False`
        (default) and such a file exists, a `RuntimeError` is raised.
    @param verbose
        Whether to print when the file was written. Default is `True`.
    @param showname
        Name to print in the confirmation message in case `verbose==True`.
    @param mkpath
        If the parent folder(s) of the given filename don't exist, they are
        created if ``mkpath==True`` (default). Otherwise, an error is raised.

    @b Notes

    The data will be put into a 1-element object array to avoid numpy
    interpreting the object itself.
    """
    filename = op.expanduser(filename)
    if not filename.endswith('.npy'):
        filename += '.npy'
    path = op.abspath(op.normpath(op.dirname(filename)))
    if mkpath:
        os.makedirs(path, exist_ok=True)
    if op.exists(filename) and not overwrite:
        raise RuntimeError("File already exists.")
    container = np.empty(1, dtype=object)
    container[0] = data
    tname = None
    try:
        with NamedTemporaryFile(dir=path, delete=False) as tfile:
            tname = tfile.name
            np.save(tfile, container, allow_pickle=True)
        # Check again, since writing may have taken some time.
        if op.exists(filename) and not overwrite:
            raise RuntimeError("File already exists.")
        os.replace(tname, filename)
        tname = None
        if verbose:
            print("%s saved to: %s" % (showname, filename))
    finally:
        if tname is not None:
            os.unlink(tname) # clean up after any failures


def load_from_file(filename, allow_pickle=True, **kw):
    r"""Load an object from disk.

    If the object had been stored using save_to_file(), the result should be a
    perfect copy of the object.

    @param allow_pickle
        Passed to `numpy.load()` to allow loading objects stored in the file.
    @param **kw
        Further keyword arguments are passed to `numpy.load()`.

    @b Notes

    This assumes the object is the only element of an array stored in the
    file, which will be the case if the file was created using
    save_to_file(). If the data is not a single-element array, it is returned
    as is.
    """
    filename = op.expanduser(filename)
    result = np.load(filename, allow_pickle=allow_pickle, **kw)
    if result.shape == (1,):
        return result[0]
    # Not a single value. Return as is.
    return result
