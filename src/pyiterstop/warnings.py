import warnings
from warnings import warn

__all__ = ['PyIterStopWarning', 'warn']


class PyIterStopWarning(UserWarning):
    pass


warnings.simplefilter('always', category=PyIterStopWarning)
del warnings
