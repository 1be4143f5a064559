from contextlib import contextmanager

import numpy as np

__all__ = ['isinteger', 'norm', 'settingerr', 'strenum']


def isinteger(x):
    """Return True for Python and NumPy integers, booleans excluded."""
    return isinstance(x, (int, np.integer)) and not isinstance(x, (bool, np.bool_))


def norm(x):
    """
    Return the Euclidean norm of an array, as a Python float.

    The entries are scaled by their largest magnitude before being squared,
    so that the norm of a finite vector is finite. A vector holding an
    infinite entry has an infinite norm and one holding a NaN a NaN norm.

    """
    x = np.asarray(x).ravel()
    if x.size == 0:
        return 0.0
    with settingerr('ignore'):
        scale = float(np.max(np.abs(x)))
        if scale == 0 or not np.isfinite(scale):
            return scale
        x = x / scale
        return scale * float(np.sqrt(np.vdot(x, x).real))


# settingerr and strenum are adapted from PyOperators (pyoperators.utils.misc).


@contextmanager
def settingerr(*args, **keywords):
    """Contextually set an error handling."""
    old = np.seterr(*args, **keywords)
    try:
        yield
    finally:
        np.seterr(**old)


def strenum(choices, last='or'):
    """
    Enumerates elements of a list

    Parameters
    ----------
    choices : list of string
        list of elements to be enumerated
    last : string
        last separator

    Examples
    --------
    >>> strenum(['blue', 'red', 'yellow'])
    "'blue', 'red' or 'yellow'"

    """
    choices = [f"'{choice}'" for choice in choices]
    if len(choices) == 0:
        raise ValueError('There is no valid choice.')
    if len(choices) == 1:
        return choices[0]
    return ', '.join(choices[0:-1]) + ' ' + last + ' ' + choices[-1]
