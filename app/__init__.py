"""Flask application factory and common utilities."""

import time
import uuid
import logging

from flask import Flask, request, g
from flask_sqlalchemy import SQLAlchemy
from flask_compress import Compress
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from config import Config

app = Flask(__name__)

logger = logging.getLogger(__name__)

app.config['SQLALCHEMY_DATABASE_URI'] = Config.database_uri(app.instance_path)
app.config['SQLALCHEMY_ENGINE_OPTIONS'] = Config.engine_options(app.config['SQLALCHEMY_DATABASE_URI'])
app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
app.config['SECRET_KEY'] = Config.secret_key()
app.json.ensure_ascii = False
app.json.sort_keys = False
app.config['SLOW_REQUEST_THRESHOLD_MS'] = Config.SLOW_REQUEST_THRESHOLD_MS
app.config['SLOW_QUERY_THRESHOLD_MS'] = Config.SLOW_QUERY_THRESHOLD_MS

db = SQLAlchemy(app)

# Rate limiting configuration for DDoS/brute-force protection
limiter = Limiter(
    app=app,
    key_func=get_remote_address,
    default_limits=Config.RATELIMIT_DEFAULT_LIMITS or None,
    storage_uri=Config.RATELIMIT_STORAGE_URI,
    strategy="fixed-window",
    headers_enabled=True,
)

# Compressão HTTP para reduzir tamanho das respostas JSON
app.config['COMPRESS_MIMETYPES'] = ['application/json']
app.config['COMPRESS_LEVEL'] = 6
app.config['COMPRESS_MIN_SIZE'] = 500  # Só comprime respostas > 500 bytes
compress = Compress(app)


@app.before_request
def _start_request_timer():
    """Store the start time and correlation id for request logging."""
    g.request_started_at = time.perf_counter()
    g.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex


@app.after_request
def _set_security_headers(response):
    """Apply security-related HTTP headers to responses."""
    response.headers.setdefault('X-Content-Type-Options', 'nosniff')
    response.headers['X-Frame-Options'] = 'DENY'
    response.headers.setdefault('Referrer-Policy', 'strict-origin-when-cross-origin')
    response.headers.setdefault('Cross-Origin-Resource-Policy', 'same-origin')
    return response


# Importa rotas e modelos depois da criação do db
from app.models import tables
from app.controllers import routes, health
routes.register_blueprints(app)

with app.app_context():
    # Import models inside the application context so SQLAlchemy metadata
    # knows about every table before ``create_all`` runs.
    from app.models import tables as _models  # noqa: F401

    db.create_all()

    # Setup structured logging with rotation (needs db.engine for slow queries)
    from app.utils.logging_config import setup_logging, log_request_info

    setup_logging(app, db.engine)


@app.after_request
def _log_request_end(response):
    """Log request completion with timing information."""
    started_at = getattr(g, 'request_started_at', None)
    duration_ms = (time.perf_counter() - started_at) * 1000 if started_at is not None else 0.0
    request_id = getattr(g, "request_id", None)
    if request_id:
        response.headers.setdefault("X-Request-ID", request_id)
    log_request_info(request, response, duration_ms, request_id=request_id)
    return response
