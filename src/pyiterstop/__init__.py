"""
The PyIterStop package decides when the iterative solvers of linear systems
should stop, and why. It contains the following modules:

- status : defines the Status enumeration and its reduction by severity
- stopcriteria : defines the residual, divergence, iteration count, failure
  and cancellation stop criteria
- core : defines the Iterator class, which combines the stop criteria
- factory : defines the default stop policy
- cg : a preconditioned conjugate gradient driven by an Iterator
- config : package defaults, some of them set by environment variables

"""

from importlib.metadata import version as _version

from .cg import pcg
from .core import Iterator
from .factory import create_default, create_default_criteria
from .status import Status, reduce_statuses
from .stopcriteria import (
    CancellationStopCriterion,
    DivergenceStopCriterion,
    FailureStopCriterion,
    IterationCountStopCriterion,
    ResidualStopCriterion,
    StopCriterion,
)
from .warnings import PyIterStopWarning

__all__ = [
    'CancellationStopCriterion',
    'DivergenceStopCriterion',
    'FailureStopCriterion',
    'IterationCountStopCriterion',
    'Iterator',
    'PyIterStopWarning',
    'ResidualStopCriterion',
    'Status',
    'StopCriterion',
    'create_default',
    'create_default_criteria',
    'pcg',
    'reduce_statuses',
]

__version__ = _version('pyiterstop')
