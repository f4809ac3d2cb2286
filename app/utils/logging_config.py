"""Logging do serviço de tarefas: arquivos rotativos, JSON lines e consultas lentas."""

import json
import logging
import os
import tempfile
from logging.handlers import TimedRotatingFileHandler
from time import perf_counter
from typing import Optional

from flask import current_app, g
from sqlalchemy import event

TEXT_FORMAT = '[%(asctime)s] %(levelname)s in %(module)s (%(funcName)s:%(lineno)d): %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class JsonFormatter(logging.Formatter):
    """Uma linha JSON por registro, com ``request_id`` quando houver."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = getattr(record, "request_id", None)
        if request_id:
            payload["request_id"] = request_id
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _log_dir(app) -> str:
    log_dir = app.config.get("APP_LOG_DIR") or os.getenv("APP_LOG_DIR") \
        or os.path.join(os.path.dirname(app.root_path), "logs")
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError:
        log_dir = os.path.join(tempfile.gettempdir(), "tarefas-logs")
        os.makedirs(log_dir, exist_ok=True)
    return log_dir


def _rotating(path: str, level: int, formatter: logging.Formatter, when='midnight', backup_count=60):
    handler = TimedRotatingFileHandler(path, when=when, backupCount=backup_count, encoding='utf-8', delay=True)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _watch_slow_queries(engine, logger: logging.Logger, threshold_ms: float) -> None:
    @event.listens_for(engine, "before_cursor_execute")
    def _start(conn, cursor, statement, parameters, context, executemany):
        context._tarefas_query_start = perf_counter()

    @event.listens_for(engine, "after_cursor_execute")
    def _finish(conn, cursor, statement, parameters, context, executemany):
        started = getattr(context, "_tarefas_query_start", None)
        if started is None:
            return
        elapsed_ms = (perf_counter() - started) * 1000
        if elapsed_ms >= threshold_ms:
            logger.warning("SLOW QUERY (%.0f ms): %s", elapsed_ms, " ".join(statement.split()))


def setup_logging(app, engine: Optional[object] = None):
    """Configura os handlers do ``app.logger``.

    Arquivos em ``APP_LOG_DIR`` (padrão ``logs/``), rotacionados à meia-noite:
    - app.log / app.jsonl: INFO em diante, texto e JSON lines
    - error.log: apenas ERROR
    - slow_queries.log: consultas acima de ``SLOW_QUERY_THRESHOLD_MS`` (rotação semanal)

    Os loggers dos módulos ``app.*`` propagam para ``app.logger``.
    """
    log_dir = _log_dir(app)
    text = logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)

    app.logger.handlers.clear()
    app.logger.setLevel(logging.DEBUG if app.debug else logging.INFO)
    app.logger.addHandler(_rotating(os.path.join(log_dir, 'app.log'), logging.INFO, text))
    app.logger.addHandler(_rotating(os.path.join(log_dir, 'app.jsonl'), logging.INFO, JsonFormatter()))
    app.logger.addHandler(_rotating(os.path.join(log_dir, 'error.log'), logging.ERROR, text, backup_count=90))
    if app.debug:
        console = logging.StreamHandler()
        console.setFormatter(text)
        app.logger.addHandler(console)

    if engine is not None:
        slow_queries = logging.getLogger('sqlalchemy.slow_queries')
        slow_queries.handlers.clear()
        slow_queries.setLevel(logging.WARNING)
        slow_queries.propagate = False
        slow_queries.addHandler(
            _rotating(os.path.join(log_dir, 'slow_queries.log'), logging.WARNING, text, when='W0', backup_count=12)
        )
        _watch_slow_queries(engine, slow_queries, float(app.config.get("SLOW_QUERY_THRESHOLD_MS", 1000)))

    app.logger.info("Logging configurado em %s", log_dir, extra={"request_id": "startup"})
    return app.logger


def log_request_info(request, response, duration_ms, request_id=None):
    """Registra requisições lentas, respostas 5xx e limites de taxa atingidos."""
    extra = {"request_id": request_id}
    where = f"[req_id={request_id or 'na'}] {request.method} {request.path}"
    threshold_ms = current_app.config.get("SLOW_REQUEST_THRESHOLD_MS") or 0

    if threshold_ms and duration_ms > threshold_ms:
        current_app.logger.warning("%s SLOW REQUEST (%.0f ms) -> %s", where, duration_ms, response.status_code,
                                   extra=extra)
    elif response.status_code >= 500:
        current_app.logger.error("%s -> %s", where, response.status_code, extra=extra)
    elif response.status_code == 429:
        current_app.logger.warning("%s RATE LIMIT de %s", where, request.remote_addr, extra=extra)
    else:
        current_app.logger.debug("%s -> %s (%.0f ms)", where, response.status_code, duration_ms, extra=extra)


def log_exception(error, request=None):
    """Registra a exceção com a pilha e, se houver, a requisição que a causou."""
    context = f" em {request.method} {request.path}" if request is not None else ""
    current_app.logger.error(
        "%s%s: %s", type(error).__name__, context, error,
        exc_info=error,
        extra={"request_id": g.get("request_id") if request is not None else None},
    )
