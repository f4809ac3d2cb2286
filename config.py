import os
import logging
import secrets

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _get_float_env(var_name: str, default: float) -> float:
    value = os.getenv(var_name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


class Config:
    """Application configuration."""
    DATABASE_URL = os.getenv("DATABASE_URL")
    DB_USER = os.getenv("DB_USER")
    DB_PASSWORD = os.getenv("DB_PASSWORD")
    DB_HOST = os.getenv("DB_HOST")
    DB_NAME = os.getenv("DB_NAME")

    SECRET_KEY = os.getenv("SECRET_KEY")
    APP_LOG_DIR = os.getenv("APP_LOG_DIR")
    SLOW_REQUEST_THRESHOLD_MS = _get_float_env("SLOW_REQUEST_THRESHOLD_MS", 750)
    SLOW_QUERY_THRESHOLD_MS = _get_float_env("SLOW_QUERY_THRESHOLD_MS", 1000)

    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI") or os.getenv("REDIS_URL") or "memory://"
    RATELIMIT_DEFAULT_LIMITS = [
        limit.strip()
        for limit in os.getenv("RATELIMIT_DEFAULT_LIMITS", "").split(",")
        if limit.strip()
    ]

    @classmethod
    def database_uri(cls, instance_path: str) -> str:
        """Resolve the SQLAlchemy URI, falling back to a local SQLite file."""
        if cls.DATABASE_URL:
            return cls.DATABASE_URL

        missing_db_vars = [
            name for name, value in (
                ('DB_USER', cls.DB_USER),
                ('DB_PASSWORD', cls.DB_PASSWORD),
                ('DB_HOST', cls.DB_HOST),
                ('DB_NAME', cls.DB_NAME),
            )
            if value is None
        ]
        if missing_db_vars:
            logger.warning(
                "Variáveis de banco ausentes (%s); usando SQLite local em modo de fallback.",
                ", ".join(missing_db_vars),
            )
            os.makedirs(instance_path, exist_ok=True)
            return f"sqlite:///{os.path.join(instance_path, 'tarefas.db')}"

        if cls.DB_PASSWORD == "":
            logger.warning("DB_PASSWORD está vazio; conectando ao MySQL sem senha (apenas recomendado para desenvolvimento local).")
        return f"mysql+pymysql://{cls.DB_USER}:{cls.DB_PASSWORD}@{cls.DB_HOST}/{cls.DB_NAME}"

    @staticmethod
    def engine_options(database_uri: str) -> dict:
        """Pool options for server databases; SQLite keeps SQLAlchemy's defaults."""
        if database_uri.startswith("sqlite"):
            return {}
        return {
            'pool_pre_ping': True,
            'pool_recycle': 1800,
            'pool_size': int(os.getenv('DB_POOL_SIZE', '30')),
            'max_overflow': int(os.getenv('DB_MAX_OVERFLOW', '50')),
            'pool_timeout': 30,  # Timeout de 30s para obter conexão
            'pool_use_lifo': True,
        }

    @classmethod
    def secret_key(cls) -> str:
        if not cls.SECRET_KEY:
            logger.warning("SECRET_KEY não definida; gerando valor temporário apenas para ambiente local.")
            return secrets.token_urlsafe(32)
        return cls.SECRET_KEY
