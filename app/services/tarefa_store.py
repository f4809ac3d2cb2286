"""Persistence layer for :class:`~app.models.tables.Tarefa` records."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from app import db
from app.models.tables import EnumStatusTarefa, Tarefa

logger = logging.getLogger(__name__)


class TarefaStore(ABC):
    """Repository interface used by the service layer.

    Every method is synchronous and individually atomic; writes become
    durable only after :meth:`commit`.
    """

    @abstractmethod
    def get(self, tarefa_id: int) -> Tarefa | None:
        ...

    @abstractmethod
    def list_all(self) -> list[Tarefa]:
        ...

    @abstractmethod
    def filter_by_titulo(self, titulo: str | None) -> list[Tarefa]:
        ...

    @abstractmethod
    def filter_by_data_range(self, inicio: datetime, fim: datetime | None) -> list[Tarefa]:
        """Return tasks with ``inicio <= data < fim``; ``fim=None`` has no upper bound."""

    @abstractmethod
    def filter_by_status(self, status: EnumStatusTarefa) -> list[Tarefa]:
        ...

    @abstractmethod
    def add(self, tarefa: Tarefa) -> None:
        """Stage a new task; the id is assigned once committed."""

    @abstractmethod
    def update(self, tarefa: Tarefa) -> None:
        ...

    @abstractmethod
    def delete(self, tarefa: Tarefa) -> None:
        ...

    @abstractmethod
    def commit(self) -> None:
        ...

    @abstractmethod
    def rollback(self) -> None:
        ...


class SqlAlchemyTarefaStore(TarefaStore):
    """TarefaStore backed by the Flask-SQLAlchemy scoped session."""

    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def get(self, tarefa_id: int) -> Tarefa | None:
        return self.session.get(Tarefa, tarefa_id)

    def list_all(self) -> list[Tarefa]:
        return list(self.session.scalars(db.select(Tarefa).order_by(Tarefa.id)))

    def filter_by_titulo(self, titulo: str | None) -> list[Tarefa]:
        stmt = db.select(Tarefa).where(Tarefa.titulo == titulo).order_by(Tarefa.id)
        return list(self.session.scalars(stmt))

    def filter_by_data_range(self, inicio: datetime, fim: datetime | None) -> list[Tarefa]:
        stmt = db.select(Tarefa).where(Tarefa.data >= inicio)
        if fim is not None:
            stmt = stmt.where(Tarefa.data < fim)
        return list(self.session.scalars(stmt.order_by(Tarefa.id)))

    def filter_by_status(self, status: EnumStatusTarefa) -> list[Tarefa]:
        stmt = db.select(Tarefa).where(Tarefa.status == status).order_by(Tarefa.id)
        return list(self.session.scalars(stmt))

    def add(self, tarefa: Tarefa) -> None:
        self.session.add(tarefa)

    def update(self, tarefa: Tarefa) -> None:
        # Loaded instances are already tracked; merge covers detached ones.
        if tarefa not in self.session:
            self.session.merge(tarefa)

    def delete(self, tarefa: Tarefa) -> None:
        self.session.delete(tarefa)

    def commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError:
            logger.exception("Falha ao salvar alterações de tarefas")
            self.session.rollback()
            raise

    def rollback(self) -> None:
        self.session.rollback()
