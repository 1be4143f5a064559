"""
Module defining the outcome of the stop criteria and iterators.

"""

from enum import Enum

__all__ = ['Status', 'reduce_statuses']


class Status(Enum):
    """
    Verdict of a stop criterion or of an iterator for the current iteration.

    CONTINUE is the only value asking the solver to iterate further and
    INDETERMINATE is the state prior to the first evaluation. Any other value
    is terminal: it ends the solve and tells why.

    """

    CONTINUE = 'continue'
    CONVERGED = 'converged'
    DIVERGED = 'diverged'
    ITERATION_LIMIT_EXCEEDED = 'iteration limit exceeded'
    NUMERICAL_FAILURE = 'numerical failure'
    CANCELLED_BY_USER = 'cancelled by user'
    INDETERMINATE = 'indeterminate'

    @property
    def is_terminal(self):
        return self not in (Status.CONTINUE, Status.INDETERMINATE)

    @property
    def severity(self):
        """Rank of the status in the reduction, the highest rank wins."""
        return _SEVERITIES[self]

    @property
    def message(self):
        return _MESSAGES[self]

    def __str__(self):
        return self.value


# highest first
_PRECEDENCE = (
    Status.CANCELLED_BY_USER,
    Status.NUMERICAL_FAILURE,
    Status.DIVERGED,
    Status.ITERATION_LIMIT_EXCEEDED,
    Status.CONVERGED,
    Status.CONTINUE,
    Status.INDETERMINATE,
)
_SEVERITIES = {s: len(_PRECEDENCE) - i for i, s in enumerate(_PRECEDENCE)}

_MESSAGES = {
    Status.CONTINUE: 'Solver is running.',
    Status.CONVERGED: 'Solver converged.',
    Status.DIVERGED: 'Solver failed: divergence detected.',
    Status.ITERATION_LIMIT_EXCEEDED: 'Solver reached maximum number of '
    'iterations without reaching specified tolerance.',
    Status.NUMERICAL_FAILURE: 'Solver failed: NaN or infinite value encountered.',
    Status.CANCELLED_BY_USER: 'Solver cancelled.',
    Status.INDETERMINATE: 'Solver is not started.',
}


def reduce_statuses(statuses):
    """
    Return the most severe status of a collection of statuses.

    The precedence, highest first, is CANCELLED_BY_USER, NUMERICAL_FAILURE,
    DIVERGED, ITERATION_LIMIT_EXCEEDED, CONVERGED, CONTINUE. The outcome does
    not depend on the order of the statuses. An empty collection reduces to
    INDETERMINATE.

    Example
    -------
    >>> reduce_statuses([Status.CONVERGED, Status.DIVERGED, Status.CONTINUE])
    <Status.DIVERGED: 'diverged'>

    """
    return max(statuses, key=_SEVERITIES.__getitem__, default=Status.INDETERMINATE)
