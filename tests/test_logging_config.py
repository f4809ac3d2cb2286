import json
import logging

from flask import Response, request

from app import app
from app.utils.logging_config import JsonFormatter, log_exception, log_request_info


def test_json_formatter_includes_request_id():
    record = logging.LogRecord('app.services.tarefas', logging.INFO, __file__, 1, 'Tarefa %s criada', (7,), None)
    record.request_id = 'abc123'

    payload = json.loads(JsonFormatter().format(record))

    assert payload['message'] == 'Tarefa 7 criada'
    assert payload['level'] == 'INFO'
    assert payload['request_id'] == 'abc123'


def test_slow_request_is_logged_as_warning(caplog):
    with app.test_request_context('/Tarefa/ObterTodos'):
        with caplog.at_level(logging.DEBUG, logger=app.logger.name):
            log_request_info(request, Response(status=200), 10_000, request_id='r1')

    assert any(r.levelno == logging.WARNING and 'SLOW REQUEST' in r.getMessage() for r in caplog.records)


def test_server_error_response_is_logged_as_error(caplog):
    with app.test_request_context('/Tarefa/1', method='PUT'):
        with caplog.at_level(logging.DEBUG, logger=app.logger.name):
            log_request_info(request, Response(status=500), 1)

    assert any(r.levelno == logging.ERROR and 'PUT /Tarefa/1' in r.getMessage() for r in caplog.records)


def test_log_exception_keeps_traceback(caplog):
    with app.test_request_context('/Tarefa'):
        try:
            raise RuntimeError('falhou')
        except RuntimeError as exc:
            with caplog.at_level(logging.ERROR, logger=app.logger.name):
                log_exception(exc, request)

    record = caplog.records[-1]
    assert 'RuntimeError em GET /Tarefa: falhou' in record.getMessage()
    assert record.exc_info is not None
