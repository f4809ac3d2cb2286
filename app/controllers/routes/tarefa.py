"""
Blueprint do recurso de tarefas.

Rotas:
    - GET    /Tarefa/<id>: Obtem tarefa por id
    - GET    /Tarefa/ObterTodos: Lista todas as tarefas
    - GET    /Tarefa/ObterPorTitulo?titulo=: Filtra por titulo exato
    - GET    /Tarefa/ObterPorData?data=: Filtra pelo dia da data (hora ignorada)
    - GET    /Tarefa/ObterPorStatus?status=: Filtra por status
    - POST   /Tarefa: Cria tarefa (201 + Location)
    - PUT    /Tarefa/<id>: Atualiza titulo, descricao e status
    - DELETE /Tarefa/<id>: Remove tarefa (204)

Erros de dominio (data vazia, tarefa inexistente) sao convertidos em
resposta pelos handlers registrados em ``_error_handlers``.
"""

from __future__ import annotations

from flask import Blueprint, abort, jsonify, request, url_for

from app.models.tables import EnumStatusTarefa, Tarefa
from app.services.tarefas import TarefaService
from app.utils.datetime_utils import format_data_hora, parse_data_hora


# =============================================================================
# BLUEPRINT DEFINITION
# =============================================================================

tarefa_bp = Blueprint("tarefa", __name__, url_prefix="/Tarefa")


# =============================================================================
# FUNCOES AUXILIARES
# =============================================================================

def _service() -> TarefaService:
    return TarefaService()


def _serialize_tarefa(tarefa: Tarefa) -> dict:
    """Return a stable representation of a Tarefa."""

    return {
        "id": tarefa.id,
        "titulo": tarefa.titulo,
        "descricao": tarefa.descricao,
        "data": format_data_hora(tarefa.data),
        "status": tarefa.status.value if tarefa.status else None,
    }


def _parse_status(raw: object) -> EnumStatusTarefa:
    """Return the status from its value, member name or integer index."""

    if isinstance(raw, EnumStatusTarefa):
        return raw
    membros = list(EnumStatusTarefa)
    if isinstance(raw, int) and not isinstance(raw, bool):
        if 0 <= raw < len(membros):
            return membros[raw]
        raise ValueError(f"Status inválido: {raw!r}")
    if isinstance(raw, str):
        text = raw.strip()
        if text.isdigit():
            return _parse_status(int(text))
        for membro in membros:
            if text.lower() in (membro.value.lower(), membro.name.lower()):
                return membro
    raise ValueError(f"Status inválido: {raw!r}")


def _tarefa_from_payload() -> Tarefa:
    """Build a transient Tarefa from the JSON body, or abort with 400."""

    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        abort(400, description="O corpo da requisição deve ser um objeto JSON.")

    try:
        data = parse_data_hora(payload.get("data"))
    except ValueError:
        abort(400, description="Data inválida.")

    status_raw = payload.get("status")
    try:
        status = _parse_status(status_raw) if status_raw is not None else EnumStatusTarefa.PENDENTE
    except ValueError:
        abort(400, description="Status inválido.")

    return Tarefa(
        titulo=payload.get("titulo"),
        descricao=payload.get("descricao"),
        data=data,
        status=status,
    )


# =============================================================================
# CONSULTAS
# =============================================================================

@tarefa_bp.route("/<int:id>", methods=["GET"])
def obter_por_id(id: int):
    """Return a single task, or 404 when it does not exist."""

    tarefa = _service().obter_por_id(id)
    return jsonify(_serialize_tarefa(tarefa))


@tarefa_bp.route("/ObterTodos", methods=["GET"])
def obter_todos():
    tarefas = _service().obter_todos()
    return jsonify([_serialize_tarefa(tarefa) for tarefa in tarefas])


@tarefa_bp.route("/ObterPorTitulo", methods=["GET"])
def obter_por_titulo():
    tarefas = _service().obter_por_titulo(request.args.get("titulo"))
    return jsonify([_serialize_tarefa(tarefa) for tarefa in tarefas])


@tarefa_bp.route("/ObterPorData", methods=["GET"])
def obter_por_data():
    """List tasks on the calendar day of ``data``; time of day is ignored.

    ``data`` is required: a missing value is a 400, not a lookup of the
    empty date 0001-01-01.
    """

    raw = request.args.get("data")
    if not raw:
        abort(400, description="Parâmetro 'data' é obrigatório.")
    try:
        data = parse_data_hora(raw)
    except ValueError:
        abort(400, description="Data inválida.")

    tarefas = _service().obter_por_data(data)
    return jsonify([_serialize_tarefa(tarefa) for tarefa in tarefas])


@tarefa_bp.route("/ObterPorStatus", methods=["GET"])
def obter_por_status():
    raw = request.args.get("status")
    try:
        status = _parse_status(raw)
    except ValueError:
        abort(400, description="Status inválido.")

    tarefas = _service().obter_por_status(status)
    return jsonify([_serialize_tarefa(tarefa) for tarefa in tarefas])


# =============================================================================
# ESCRITA
# =============================================================================

@tarefa_bp.route("", methods=["POST"])
def criar():
    """Create a task and point ``Location`` at its GET endpoint."""

    tarefa = _service().criar(_tarefa_from_payload())

    response = jsonify(_serialize_tarefa(tarefa))
    response.status_code = 201
    response.headers["Location"] = url_for("tarefa.obter_por_id", id=tarefa.id, _external=True)
    return response


@tarefa_bp.route("/<int:id>", methods=["PUT"])
def atualizar(id: int):
    tarefa = _service().atualizar(id, _tarefa_from_payload())
    return jsonify(_serialize_tarefa(tarefa))


@tarefa_bp.route("/<int:id>", methods=["DELETE"])
def deletar(id: int):
    _service().deletar(id)
    return ("", 204)
