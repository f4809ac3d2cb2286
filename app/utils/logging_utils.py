"""Utility functions for standardized application logging."""
from __future__ import annotations

import logging
from typing import Iterable

logger = logging.getLogger(__name__)


def log_alteracao_dados(
    action: str,
    resource_type: str,
    resource_id: int | None,
    fields: Iterable[str] = (),
) -> None:
    """Log creation, update or deletion of data."""
    logger.info(
        "Alteracao de dados | acao=%s | %s_id=%s | campos=%s",
        action,
        resource_type,
        resource_id,
        list(fields),
    )


def log_validacao_rejeitada(resource_type: str, resource_id: int | None, motivo: str) -> None:
    """Log input rejected by domain validation."""
    logger.warning(
        "Validacao rejeitada | %s_id=%s | motivo=%s",
        resource_type,
        resource_id,
        motivo,
    )
