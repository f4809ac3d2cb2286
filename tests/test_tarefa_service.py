from datetime import datetime

import pytest

from app.models.tables import EnumStatusTarefa, Tarefa
from app.services.tarefas import (
    MENSAGEM_DATA_VAZIA,
    TarefaNotFoundError,
    TarefaService,
    TarefaValidationError,
)
from app.utils.datetime_utils import DATA_VAZIA
from tests.fakes import InMemoryTarefaStore


def _tarefa(titulo='Estudar', data=datetime(2024, 3, 5, 10, 0), status=EnumStatusTarefa.PENDENTE, descricao='Capítulo 1'):
    return Tarefa(titulo=titulo, descricao=descricao, data=data, status=status)


@pytest.fixture()
def store():
    return InMemoryTarefaStore([
        _tarefa('Estudar', datetime(2024, 3, 5, 10, 0)),
        _tarefa('Ler', datetime(2024, 3, 6, 9, 30), EnumStatusTarefa.EM_ANDAMENTO),
        _tarefa('Correr', datetime(2024, 3, 5, 23, 59, 59), EnumStatusTarefa.FINALIZADO),
    ])


@pytest.fixture()
def service(store):
    return TarefaService(store)


def test_criar_assigns_new_distinct_id(service, store):
    existing_ids = {t.id for t in store.list_all()}

    criada = service.criar(_tarefa('Nova', datetime(2024, 4, 1, 8, 0)))

    assert criada.id is not None
    assert criada.id not in existing_ids
    encontrada = service.obter_por_id(criada.id)
    assert (encontrada.titulo, encontrada.descricao, encontrada.data, encontrada.status) == (
        'Nova', 'Capítulo 1', datetime(2024, 4, 1, 8, 0), EnumStatusTarefa.PENDENTE
    )
    assert store.writes == 1


def test_criar_with_empty_date_is_rejected_without_write(service, store):
    before = [t.id for t in store.list_all()]

    with pytest.raises(TarefaValidationError) as exc:
        service.criar(_tarefa(data=DATA_VAZIA))

    assert exc.value.message == MENSAGEM_DATA_VAZIA
    assert [t.id for t in store.list_all()] == before
    assert store.writes == 0
    assert store.commits == 0


def test_criar_with_missing_date_is_rejected(service, store):
    with pytest.raises(TarefaValidationError):
        service.criar(_tarefa(data=None))
    assert store.writes == 0


def test_obter_por_id_missing_raises_not_found(service):
    with pytest.raises(TarefaNotFoundError) as exc:
        service.obter_por_id(999)
    assert exc.value.tarefa_id == 999


def test_atualizar_missing_id_raises_not_found_without_write(service, store):
    with pytest.raises(TarefaNotFoundError):
        service.atualizar(999, _tarefa('Outro'))
    assert store.writes == 0


def test_atualizar_missing_id_with_empty_date_is_not_found(service):
    with pytest.raises(TarefaNotFoundError):
        service.atualizar(999, _tarefa(data=DATA_VAZIA))


def test_atualizar_with_empty_date_leaves_record_unchanged(service, store):
    with pytest.raises(TarefaValidationError):
        service.atualizar(1, _tarefa('Alterado', DATA_VAZIA, EnumStatusTarefa.FINALIZADO, 'Nova descrição'))

    tarefa = store.get(1)
    assert tarefa.titulo == 'Estudar'
    assert tarefa.descricao == 'Capítulo 1'
    assert tarefa.status == EnumStatusTarefa.PENDENTE
    assert store.writes == 0


def test_atualizar_overwrites_only_titulo_descricao_status(service, store):
    atualizada = service.atualizar(
        1,
        _tarefa('Estudar Python', datetime(2030, 1, 1, 12, 0), EnumStatusTarefa.FINALIZADO, 'Capítulo 2'),
    )

    assert atualizada.id == 1
    assert atualizada.titulo == 'Estudar Python'
    assert atualizada.descricao == 'Capítulo 2'
    assert atualizada.status == EnumStatusTarefa.FINALIZADO
    assert atualizada.data == datetime(2024, 3, 5, 10, 0)
    assert store.get(1) is atualizada
    assert store.writes == 1


def test_deletar_removes_and_second_delete_is_not_found(service, store):
    service.deletar(2)

    assert 2 not in [t.id for t in service.obter_todos()]
    with pytest.raises(TarefaNotFoundError):
        service.deletar(2)
    assert store.writes == 1


def test_obter_todos_returns_every_record(service):
    assert [t.titulo for t in service.obter_todos()] == ['Estudar', 'Ler', 'Correr']


def test_obter_por_data_ignores_time_of_day(service):
    manha = service.obter_por_data(datetime(2024, 3, 5, 0, 0, 0))
    noite = service.obter_por_data(datetime(2024, 3, 5, 23, 59, 59))

    assert [t.id for t in manha] == [t.id for t in noite] == [1, 3]


def test_obter_por_titulo_exact_match(service):
    assert [t.id for t in service.obter_por_titulo('Ler')] == [2]
    assert service.obter_por_titulo('ler') == []


def test_obter_por_status(service):
    assert [t.id for t in service.obter_por_status(EnumStatusTarefa.FINALIZADO)] == [3]


def test_queries_without_matches_return_empty_lists():
    service = TarefaService(InMemoryTarefaStore())

    assert service.obter_todos() == []
    assert service.obter_por_titulo('Nada') == []
    assert service.obter_por_status(EnumStatusTarefa.EM_ANDAMENTO) == []
    assert service.obter_por_data(datetime(2024, 1, 1)) == []


def test_obter_por_data_on_last_representable_day():
    ultima = _tarefa('Fim dos tempos', datetime.max)
    service = TarefaService(InMemoryTarefaStore([_tarefa('Hoje'), ultima]))

    assert service.obter_por_data(datetime(9999, 12, 31)) == [ultima]
