"""
Module defining the stop criteria of iterative linear solvers.

A stop criterion is given, at each iteration, the iteration index, the current
solution, the source (right-hand side) and the residual vectors and it returns
a Status. It remembers its last verdict, which is latched once terminal, until
it is reset.

"""

import copy
import threading
from collections import deque

import numpy as np

from . import config
from .status import Status
from .utils import isinteger, norm

__all__ = [
    'CancellationStopCriterion',
    'DivergenceStopCriterion',
    'FailureStopCriterion',
    'IterationCountStopCriterion',
    'ResidualStopCriterion',
    'StopCriterion',
    'check_telemetry',
]


class StopCriterion:
    """
    Abstract class for the stop criteria.

    Subclasses implement the '_determine_status' method, which is called at
    most once per iteration index and never after a terminal status has been
    returned. Subclasses holding a history must reset it in the 'reset'
    method, by rebinding new containers.

    Attributes
    ----------
    status : Status
        The last computed verdict, INDETERMINATE before the first evaluation.

    """

    def __init__(self):
        self.reset()

    @property
    def status(self):
        return self._status

    def evaluate(self, niterations, x, b, r):
        """
        Determine the status of the criterion for the current iteration.

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

        Returns
        -------
        status : Status
            The same value as that of the 'status' attribute.

        """
        x, b, r = check_telemetry(
            niterations, x, b, r, shape=self._shape, last=self._niterations
        )
        if self._status.is_terminal or niterations == self._niterations:
            return self._status
        self._shape = b.shape
        self._niterations = niterations
        self._status = self._determine_status(niterations, x, b, r)
        return self._status

    def reset(self):
        """Restore the pre-evaluation state. The configuration is kept."""
        self._status = Status.INDETERMINATE
        self._niterations = None
        self._shape = None

    def clone(self):
        """Return a criterion with the same configuration and a fresh state."""
        out = copy.copy(self)
        out.reset()
        return out

    def _determine_status(self, niterations, x, b, r):
        raise NotImplementedError(
            "The stop criterion does not define a '_determine_status' method."
        )

    def __str__(self):
        return ''

    def __repr__(self):
        return f'{type(self).__name__}({self})'


class ResidualStopCriterion(StopCriterion):
    """
    Converge when the normalized residual norm is below a tolerance.

    The normalized residual is ||r|| / ||b||, or ||r|| when the source norm
    ||b|| does not exceed the absolute tolerance 'atol'.

    """

    def __init__(
        self,
        tol=config.DEFAULT_TOLERANCE,
        atol=config.DEFAULT_ABSOLUTE_TOLERANCE,
        minbelow=0,
    ):
        """
        Parameters
        ----------
        tol : float, optional
            Relative tolerance, strictly positive.
        atol : float, optional
            Source norms lower than or equal to this value are not used to
            normalize the residual norm.
        minbelow : int, optional
            Number of additional and consecutive iterations during which the
            normalized residual must stay below the tolerance before the
            criterion converges.

        """
        self.tol = _check_real('tol', tol, positive=True)
        self.atol = _check_real('atol', atol)
        self.minbelow = _check_integer('minbelow', minbelow)
        StopCriterion.__init__(self)

    def reset(self):
        StopCriterion.reset(self)
        self.error = None
        self._nbelow = 0

    def _determine_status(self, niterations, x, b, r):
        r_norm = norm(r)
        b_norm = norm(b)
        self.error = r_norm / b_norm if b_norm > self.atol else r_norm
        if not self.error < self.tol:
            self._nbelow = 0
            return Status.CONTINUE
        self._nbelow += 1
        if self._nbelow > self.minbelow:
            return Status.CONVERGED
        return Status.CONTINUE

    def __str__(self):
        out = f'tol={self.tol}'
        if self.minbelow > 0:
            out += f', minbelow={self.minbelow}'
        return out


class DivergenceStopCriterion(StopCriterion):
    """
    Diverge when the residual norm keeps growing.

    An iteration is a growth step if its residual norm exceeds the smallest
    residual norm seen so far by more than the relative increase
    'maxincrease'. The criterion diverges after 'window' consecutive growth
    steps, so that isolated spikes of non-monotonic methods are tolerated.

    """

    def __init__(
        self, maxincrease=config.DEFAULT_MAXINCREASE, window=config.DEFAULT_WINDOW
    ):
        self.maxincrease = _check_real('maxincrease', maxincrease)
        self.window = _check_integer('window', window, positive=True)
        StopCriterion.__init__(self)

    @property
    def history(self):
        """The residual norms of the last iterations, oldest first."""
        return tuple(self._history)

    def reset(self):
        StopCriterion.reset(self)
        self._history = deque(maxlen=self.window)
        self._minimum = np.inf
        self._ngrowths = 0

    def _determine_status(self, niterations, x, b, r):
        r_norm = norm(r)
        self._history.append(r_norm)
        if r_norm > (1 + self.maxincrease) * self._minimum:
            self._ngrowths += 1
        else:
            self._ngrowths = 0
            # NaN norms are ignored
            if r_norm < self._minimum:
                self._minimum = r_norm
        if self._ngrowths >= self.window:
            return Status.DIVERGED
        return Status.CONTINUE

    def __str__(self):
        return f'maxincrease={self.maxincrease}, window={self.window}'


class IterationCountStopCriterion(StopCriterion):
    """
    Stop when the iteration index reaches the maximum number of iterations.

    """

    def __init__(self, maxiter=config.DEFAULT_MAXITER):
        self.maxiter = _check_integer('maxiter', maxiter)
        StopCriterion.__init__(self)

    def _determine_status(self, niterations, x, b, r):
        if niterations >= self.maxiter:
            return Status.ITERATION_LIMIT_EXCEEDED
        return Status.CONTINUE

    def __str__(self):
        return f'maxiter={self.maxiter}'


class FailureStopCriterion(StopCriterion):
    """
    Fail as soon as the solution or the residual has a NaN or infinite value.

    """

    def _determine_status(self, niterations, x, b, r):
        if np.all(np.isfinite(x)) and np.all(np.isfinite(r)):
            return Status.CONTINUE
        return Status.NUMERICAL_FAILURE


class CancellationStopCriterion(StopCriterion):
    """
    Stop when a cancellation has been requested by the 'cancel' method.

    The 'cancel' method can be called from another thread than that of the
    solver. The evaluations starting after it has returned are cancelled.

    """

    @property
    def cancelled(self):
        return self._event.is_set()

    def cancel(self):
        self._event.set()

    def evaluate(self, niterations, x, b, r):
        status = StopCriterion.evaluate(self, niterations, x, b, r)
        if status is Status.CONTINUE and self._event.is_set():
            # same iteration index evaluated again after the cancellation
            self._status = status = Status.CANCELLED_BY_USER
        return status

    def reset(self):
        StopCriterion.reset(self)
        self._event = threading.Event()

    def _determine_status(self, niterations, x, b, r):
        if self._event.is_set():
            return Status.CANCELLED_BY_USER
        return Status.CONTINUE


def check_telemetry(niterations, x, b, r, shape=None, last=None):
    """
    Check the telemetry handed to the stop criteria and return the vectors
    as arrays.

    Parameters
    ----------
    niterations : int
        The iteration index.
    x, b, r : array_like
        The solution, source and residual vectors.
    shape : tuple, optional
        The vector shape established by the previous iterations.
    last : int, optional
        The previous iteration index.

    """
    if not isinteger(niterations):
        raise TypeError(f"The iteration index '{niterations}' is not an integer.")
    if niterations < 0:
        raise ValueError(f'The iteration index {niterations} is negative.')
    if last is not None and niterations < last:
        raise ValueError(
            f'The iteration index {niterations} is lower than the previous one '
            f'{last}. Reset the stop criteria before starting a new solve.'
        )
    x = np.asarray(x)
    b = np.asarray(b)
    r = np.asarray(r)
    if x.shape != b.shape or r.shape != b.shape:
        raise ValueError(
            f"The shapes of the solution '{x.shape}', source '{b.shape}' and "
            f"residual '{r.shape}' vectors are incompatible."
        )
    if shape is not None and b.shape != shape:
        raise ValueError(
            f"The shape of the vectors '{b.shape}' differs from that of the "
            f"previous iterations '{shape}'."
        )
    return x, b, r


def _check_integer(name, value, positive=False):
    if not isinteger(value):
        raise TypeError(f"The argument '{name}' is not an integer: '{value}'.")
    if value < 0 or positive and value == 0:
        raise ValueError(
            f"The argument '{name}' is not {'strictly ' if positive else ''}"
            f"positive: {value}."
        )
    return int(value)


def _check_real(name, value, positive=False):
    if isinstance(value, (bool, np.bool_)) or not isinstance(
        value, (int, float, np.integer, np.floating)
    ):
        raise TypeError(f"The argument '{name}' is not a real number: '{value}'.")
    if not (value > 0 if positive else value >= 0):
        raise ValueError(
            f"The argument '{name}' is not {'strictly ' if positive else ''}"
            f"positive: {value}."
        )
    return float(value)
