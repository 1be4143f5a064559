"""
This module defines the Iterator class, which combines the verdicts of stop
criteria into the status of an iterative solve.

"""

import threading

from . import config
from .status import Status, reduce_statuses
from .stopcriteria import CancellationStopCriterion, StopCriterion, check_telemetry
from .utils import strenum
from .warnings import PyIterStopWarning, warn

__all__ = ['Iterator']


class Iterator:
    """
    Decide whether an iterative solver should continue or stop, and why.

    The solver calls the 'evaluate' method once per iteration, with increasing
    iteration indices, until a status other than CONTINUE is returned. All the
    stop criteria are evaluated with the same telemetry and their verdicts are
    reduced by severity: CANCELLED_BY_USER, NUMERICAL_FAILURE, DIVERGED,
    ITERATION_LIMIT_EXCEEDED, CONVERGED and CONTINUE. The order of the
    criteria does not change the outcome.

    A terminal status is kept until the 'reset' method is called, which makes
    the instance reusable for another solve.

    Example
    -------
    >>> iterator = Iterator([IterationCountStopCriterion(100),
    ...                      ResidualStopCriterion(1e-8)])
    >>> status = iterator.evaluate(niterations, x, b, r)
    >>> if status.is_terminal:
    ...     print(status.message)

    """

    def __init__(self, criteria, disp=None):
        """
        Parameters
        ----------
        criteria : iterable of StopCriterion
            The stop criteria. The iterator owns copies of them, so that
            iterators built from the same criteria do not share any state.
            They must be of different types.
        disp : boolean, optional
            If true, print a message when the solve terminates. By default,
            the value of pyiterstop.config.VERBOSE is used.

        """
        criteria = tuple(criteria)
        if len(criteria) == 0:
            raise ValueError('The iterator has no stop criterion.')
        for criterion in criteria:
            if not isinstance(criterion, StopCriterion):
                raise TypeError(
                    f"The stop criterion '{criterion}' is not a StopCriterion "
                    'instance.'
                )
        names = [type(_).__name__ for _ in criteria]
        duplicates = sorted({_ for _ in names if names.count(_) > 1})
        if len(duplicates) > 0:
            raise ValueError(
                f'The iterator has duplicate stop criteria: '
                f"{strenum(duplicates, 'and')}."
            )
        self._criteria = tuple(_.clone() for _ in criteria)
        self._cancelled = threading.Event()
        self.disp = config.VERBOSE if disp is None else bool(disp)
        self.reset()

    def __len__(self):
        return len(self._criteria)

    @property
    def cancelled(self):
        return self._cancelled.is_set()

    @property
    def status(self):
        """The last overall status, INDETERMINATE before the first evaluation."""
        return self._status

    @property
    def statuses(self):
        """The last statuses of the stop criteria, in their order."""
        return tuple(_.status for _ in self._criteria)

    def cancel(self):
        """
        Request the cancellation of the solve. It can be called from another
        thread than that of the solver.

        The evaluations starting after this call return CANCELLED_BY_USER,
        unless the solve has already terminated, in which case its status is
        not altered.

        """
        self._cancelled.set()
        for criterion in self._criteria:
            if isinstance(criterion, CancellationStopCriterion):
                criterion.cancel()

    def clone(self):
        """Return an iterator with cloned stop criteria and a fresh state."""
        return type(self)(self._criteria, disp=self.disp)

    def evaluate(self, niterations, x, b, r):
        """
        Evaluate the stop criteria and return the overall status.

        Parameters
        ----------
        niterations : int
            The iteration index. It must not decrease within a solve.
        x : array_like
            The current solution vector.
        b : array_like
            The source vector, i.e. the right-hand side of the linear system.
        r : array_like
            The current residual vector.

        Raises
        ------
        ValueError : if the vector shapes are incompatible, between themselves
            or with those of the previous iterations, or if the iteration index
            is negative or lower than the previous one.

        """
        if self._status.is_terminal:
            warn(
                f"The solve has already terminated with status '{self._status}'."
                " Use the 'reset' method before starting a new solve.",
                PyIterStopWarning,
            )
            return self._status
        x, b, r = check_telemetry(
            niterations, x, b, r, shape=self._shape, last=self._niterations
        )
        self._shape = b.shape
        self._niterations = niterations
        statuses = [_.evaluate(niterations, x, b, r) for _ in self._criteria]
        if self._cancelled.is_set():
            statuses.append(Status.CANCELLED_BY_USER)
        self._status = reduce_statuses(statuses)
        if self.disp and self._status.is_terminal:
            print(f'{niterations:4}: {self._status.message}')
        return self._status

    def reset(self):
        """Reset the cancellation request, the status and the stop criteria."""
        self._status = Status.INDETERMINATE
        self._niterations = None
        self._shape = None
        self._cancelled.clear()
        for criterion in self._criteria:
            criterion.reset()

    def __str__(self):
        return ' or '.join(repr(_) for _ in self._criteria)

    def __repr__(self):
        criteria = ', '.join(repr(_) for _ in self._criteria)
        return f'{type(self).__name__}([{criteria}])'
