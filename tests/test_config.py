import importlib

import pytest

from pyiterstop import PyIterStopWarning, config, create_default


@pytest.fixture
def reload_config(monkeypatch):
    yield monkeypatch
    monkeypatch.delenv('PYITERSTOP_VERBOSE', raising=False)
    importlib.reload(config)


@pytest.mark.parametrize('value, expected', [('', False), ('0', False), ('1', True)])
def test_verbose(reload_config, value, expected):
    reload_config.setenv('PYITERSTOP_VERBOSE', value)
    importlib.reload(config)
    assert config.VERBOSE is expected
    assert create_default().disp is expected
    assert create_default(disp=not expected).disp is not expected


def test_verbose_invalid(reload_config):
    reload_config.setenv('PYITERSTOP_VERBOSE', 'yes')
    with pytest.warns(PyIterStopWarning):
        importlib.reload(config)
    assert config.VERBOSE is False


def test_defaults():
    assert config.DEFAULT_TOLERANCE == 1e-12
    assert config.DEFAULT_MAXITER == 1000
    assert 0 < config.DEFAULT_ABSOLUTE_TOLERANCE < config.DEFAULT_TOLERANCE
    assert config.DEFAULT_MAXINCREASE > 0
    assert config.DEFAULT_WINDOW > 1
