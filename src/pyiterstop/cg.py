import time

import numpy as np
from scipy.sparse import identity
from scipy.sparse.linalg import aslinearoperator

from .factory import create_default
from .status import Status
from .utils import norm, settingerr

__all__ = ['pcg']


def pcg(A, b, x0=None, M=None, iterator=None, callback=None, disp=False):
    """
    output = pcg(A, b, [x0, M, iterator, callback, disp])

    Preconditioned conjugate gradient iteration to solve A x = b, whose
    termination is decided by an Iterator.

    Parameters
    ----------
    A : {LinearOperator, sparse matrix, dense matrix}
        The real N-by-N matrix of the linear system
        ``A`` must represent a symmetric, positive definite matrix
    b : {array, matrix}
        Right hand side of the linear system. Has shape (N,) or (N,1).
    x0  : {array, matrix}
        Starting guess for the solution.
    M : {LinearOperator, sparse matrix, dense matrix}, optional
        Preconditioner for A.  The preconditioner should approximate the
        inverse of A.
    iterator : Iterator, optional
        The iterator deciding when to stop. By default, the iterator returned
        by pyiterstop.create_default is used. An iterator which has already
        been used is reset.
    callback : function, optional
        User-supplied function to call after each iteration.  It is called
        as callback(niterations, x, r).
    disp : boolean
        Set to True to display the relative residual of each iteration.

    Returns
    -------
    output : dict whose keys are
        'x' : the solution.
        'success' : boolean indicating convergence
        'status' : the terminal Status of the iterator
        'message' : string describing the status
        'nit' : number of completed iterations
        'error' : normalized residual ||Ax-b|| / ||b||
        'time' : elapsed time in solver
        'iterator' : the Iterator instance

    """
    time0 = time.time()
    b = np.asarray(b)
    dtype = np.result_type(b.dtype, float)
    if dtype.kind == 'c':
        raise TypeError('The complex case is not yet implemented.')
    shape = b.shape
    b = b.astype(dtype).ravel()
    n = b.size

    A = aslinearoperator(A)
    if A.shape != (n, n):
        raise ValueError(
            f"The operator shape '{A.shape}' is incompatible with that of the "
            f"RHS '{shape}'."
        )
    M = aslinearoperator(identity(n, dtype) if M is None else M)
    if iterator is None:
        iterator = create_default()
    elif iterator.status is not Status.INDETERMINATE:
        iterator.reset()

    b_norm = norm(b)
    if x0 is None or b_norm == 0:
        x = np.zeros(n, dtype)
    else:
        x = np.array(x0, dtype).ravel()
    r = b - A.matvec(x)

    niterations = 0
    status = iterator.evaluate(niterations, x, b, r)
    if status is Status.CONTINUE:
        s = M.matvec(r)
        d = s.copy()
        delta = np.dot(r, s)
    while status is Status.CONTINUE:
        q = A.matvec(d)
        with settingerr('ignore'):
            alpha = delta / np.dot(d, q)
            x += alpha * d
            r -= alpha * q
            s = M.matvec(r)
            delta_old = delta
            delta = np.dot(r, s)
            d *= delta / delta_old
            d += s
        niterations += 1
        if callback is not None:
            callback(niterations, x, r)
        status = iterator.evaluate(niterations, x, b, r)
        if disp:
            print(f'{niterations:4}: {_error(r, b_norm)}')

    return {
        'x': x.reshape(shape),
        'success': status is Status.CONVERGED,
        'status': status,
        'message': status.message,
        'nit': niterations,
        'error': _error(r, b_norm),
        'time': time.time() - time0,
        'iterator': iterator,
    }


def _error(r, b_norm):
    r_norm = norm(r)
    if b_norm == 0:
        return r_norm
    return r_norm / b_norm
