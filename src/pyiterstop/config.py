import os as _os

import numpy as _np

from .warnings import PyIterStopWarning as _PyIterStopWarning
from .warnings import warn as _warn


# adapted from PyOperators (pyoperators.config)
def getenv(key, default, cls):
    val = _os.getenv(key, '').strip()
    if len(val) == 0:
        return cls(default)
    try:
        if cls is bool:
            val = int(val)
        val = cls(val)
    except ValueError:
        _warn(f"Invalid environment variable {key}='{val}'", _PyIterStopWarning)
        return cls(default)
    return val


# default value of the 'disp' keyword of the iterators
VERBOSE = getenv('PYITERSTOP_VERBOSE', False, bool)

# defaults handed explicitly by the factory to the stop criteria
DEFAULT_TOLERANCE = 1e-12

# below this source norm, the residual norm is not normalized
DEFAULT_ABSOLUTE_TOLERANCE = float(_np.finfo(float).tiny)

DEFAULT_MAXITER = 1000

DEFAULT_MAXINCREASE = 0.08

DEFAULT_WINDOW = 10

del getenv
