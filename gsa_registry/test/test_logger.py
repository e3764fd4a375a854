"""
Tests for the JSON logging setup
"""

import json
import logging
import sys

from gsa_registry.logger import BASE_LOGGER_NAME, JsonFormatter, get_logger


def test_module_loggers_nest_under_base_logger():
    base = get_logger()
    child = get_logger('gsa_registry.routes.assets')
    outside = get_logger('scripts')

    assert base.name == BASE_LOGGER_NAME
    assert child.name == 'gsa_registry.routes.assets'
    assert outside.name == 'gsa_registry.scripts'
    assert get_logger() is base
    assert len(base.handlers) == 3


def test_json_formatter_output():
    formatter = JsonFormatter({'level': 'levelname', 'logger': 'name', 'message': 'message'})
    record = logging.LogRecord('gsa_registry.test', logging.WARNING, __file__, 10,
                               'MAC not recognized: %s', ('Ministry of Magic',), None)

    assert json.loads(formatter.format(record)) == {
        'level': 'WARNING',
        'logger': 'gsa_registry.test',
        'message': 'MAC not recognized: Ministry of Magic',
    }


def test_json_formatter_includes_exceptions():
    formatter = JsonFormatter()
    try:
        raise ValueError('bad count')
    except ValueError:
        record = logging.LogRecord('gsa_registry.test', logging.ERROR, __file__, 10, 'failed', (), sys.exc_info())

    output = json.loads(formatter.format(record))
    assert output['message'] == 'failed'
    assert 'ValueError: bad count' in output['exc_info']
