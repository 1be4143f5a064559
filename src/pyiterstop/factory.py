"""
Default stop policies of the iterative solvers.

"""

from . import config
from .core import Iterator
from .stopcriteria import (
    DivergenceStopCriterion,
    FailureStopCriterion,
    IterationCountStopCriterion,
    ResidualStopCriterion,
)

__all__ = ['create_default', 'create_default_criteria']


def create_default_criteria(
    tol=config.DEFAULT_TOLERANCE,
    atol=config.DEFAULT_ABSOLUTE_TOLERANCE,
    maxiter=config.DEFAULT_MAXITER,
    maxincrease=config.DEFAULT_MAXINCREASE,
    window=config.DEFAULT_WINDOW,
):
    """
    Return new instances of the failure, divergence, iteration count and
    residual stop criteria, in this order.

    Parameters
    ----------
    tol : float, optional
        Relative tolerance of the residual criterion.
    atol : float, optional
        Source norm below which the residual norm is not normalized.
    maxiter : int, optional
        Maximum number of iterations.
    maxincrease : float, optional
        Relative increase of the residual norm over its minimum counted as
        a growth step by the divergence criterion.
    window : int, optional
        Number of consecutive growth steps after which the solve diverges.

    """
    return [
        FailureStopCriterion(),
        DivergenceStopCriterion(maxincrease=maxincrease, window=window),
        IterationCountStopCriterion(maxiter=maxiter),
        ResidualStopCriterion(tol=tol, atol=atol),
    ]


def create_default(disp=None, **keywords):
    """
    Return an Iterator with the default stop criteria.

    The keywords are those of 'create_default_criteria'.

    """
    return Iterator(create_default_criteria(**keywords), disp=disp)
