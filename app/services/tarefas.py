"""Regras de negócio das tarefas.

``TarefaService`` traduz cada operação do recurso ``/Tarefa`` em uma
chamada ao :class:`~app.services.tarefa_store.TarefaStore`. O serviço não
guarda estado entre chamadas e não conhece HTTP: erros de domínio são
sinalizados com :class:`TarefaValidationError` e
:class:`TarefaNotFoundError`.
"""

from __future__ import annotations

from datetime import datetime

from app.models.tables import EnumStatusTarefa, Tarefa
from app.services.tarefa_store import SqlAlchemyTarefaStore, TarefaStore
from app.utils.datetime_utils import intervalo_do_dia, is_data_vazia
from app.utils.logging_utils import log_alteracao_dados, log_validacao_rejeitada

MENSAGEM_DATA_VAZIA = "A data da tarefa não pode ser vazia"

CAMPOS_ATUALIZAVEIS = ("titulo", "descricao", "status")


class TarefaError(RuntimeError):
    """Base class for task domain errors."""


class TarefaValidationError(TarefaError):
    """Raised when a task fails field validation."""

    def __init__(self, message: str = MENSAGEM_DATA_VAZIA):
        super().__init__(message)
        self.message = message


class TarefaNotFoundError(TarefaError):
    """Raised when no task exists with the requested id."""

    def __init__(self, tarefa_id: int):
        super().__init__(f"Tarefa {tarefa_id} não encontrada")
        self.tarefa_id = tarefa_id


class TarefaService:
    """Stateless operations over the task store."""

    def __init__(self, store: TarefaStore | None = None):
        self.store = store if store is not None else SqlAlchemyTarefaStore()

    def obter_por_id(self, tarefa_id: int) -> Tarefa:
        tarefa = self.store.get(tarefa_id)
        if tarefa is None:
            raise TarefaNotFoundError(tarefa_id)
        return tarefa

    def obter_todos(self) -> list[Tarefa]:
        return self.store.list_all()

    def obter_por_titulo(self, titulo: str | None) -> list[Tarefa]:
        return self.store.filter_by_titulo(titulo)

    def obter_por_data(self, data: datetime) -> list[Tarefa]:
        """Return tasks whose date falls on the same calendar day as ``data``."""
        inicio, fim = intervalo_do_dia(data)
        return self.store.filter_by_data_range(inicio, fim)

    def obter_por_status(self, status: EnumStatusTarefa) -> list[Tarefa]:
        return self.store.filter_by_status(status)

    def criar(self, tarefa: Tarefa) -> Tarefa:
        """
        Persiste uma nova tarefa.

        Raises:
            TarefaValidationError: Se a data estiver vazia.
        """
        self._validar_data(tarefa, tarefa_id=None)

        self.store.add(tarefa)
        self.store.commit()

        log_alteracao_dados("criar", "tarefa", tarefa.id, ("titulo", "descricao", "data", "status"))
        return tarefa

    def atualizar(self, tarefa_id: int, tarefa: Tarefa) -> Tarefa:
        """
        Substitui título, descrição e status de uma tarefa existente.

        O id e a data armazenada não são alterados; a data recebida é
        apenas validada.

        Raises:
            TarefaNotFoundError: Se a tarefa não existir.
            TarefaValidationError: Se a data estiver vazia.
        """
        tarefa_banco = self.obter_por_id(tarefa_id)
        self._validar_data(tarefa, tarefa_id=tarefa_id)

        alterados = [
            campo for campo in CAMPOS_ATUALIZAVEIS
            if getattr(tarefa_banco, campo) != getattr(tarefa, campo)
        ]
        for campo in CAMPOS_ATUALIZAVEIS:
            setattr(tarefa_banco, campo, getattr(tarefa, campo))

        self.store.update(tarefa_banco)
        self.store.commit()

        log_alteracao_dados("atualizar", "tarefa", tarefa_id, alterados)
        return tarefa_banco

    def deletar(self, tarefa_id: int) -> None:
        """
        Remove uma tarefa.

        Raises:
            TarefaNotFoundError: Se a tarefa não existir.
        """
        tarefa_banco = self.obter_por_id(tarefa_id)

        self.store.delete(tarefa_banco)
        self.store.commit()

        log_alteracao_dados("deletar", "tarefa", tarefa_id)

    def _validar_data(self, tarefa: Tarefa, tarefa_id: int | None) -> None:
        if is_data_vazia(tarefa.data):
            log_validacao_rejeitada("tarefa", tarefa_id, MENSAGEM_DATA_VAZIA)
            raise TarefaValidationError(MENSAGEM_DATA_VAZIA)
