"""
Handlers de erro centralizados para a aplicacao.

Este modulo centraliza o tratamento de erros HTTP e excecoes,
garantindo respostas JSON consistentes para a API.

Error Handlers:
    - TarefaValidationError: 400 com {"Erro": mensagem}
    - TarefaNotFoundError: 404 sem corpo
    - 400: Requisicao malformada
    - 404: Recurso nao encontrado
    - 405: Metodo nao permitido
    - 429: Rate limit excedido
    - 500: Erro interno do servidor
    - SQLAlchemyError: Erros de banco de dados

Funcoes Auxiliares:
    - api_error_response: Resposta JSON padronizada para erros
"""

from flask import Flask, Response, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from app import db
from app.services.tarefas import TarefaNotFoundError, TarefaValidationError
from app.utils.logging_config import log_exception


# =============================================================================
# FUNCOES AUXILIARES
# =============================================================================

def api_error_response(error: str, status_code: int, message: str | None = None) -> tuple[Response, int]:
    """
    Cria resposta JSON padronizada para erros de API.

    Args:
        error: Tipo do erro (ex: "Resource not found").
        status_code: Codigo HTTP do erro.
        message: Mensagem descritiva opcional.

    Returns:
        tuple[Response, int]: Resposta JSON e codigo de status.
    """
    response_data = {
        "error": error,
        "status": status_code,
    }
    if message:
        response_data["message"] = message

    return jsonify(response_data), status_code


# =============================================================================
# REGISTRO DE ERROR HANDLERS
# =============================================================================

def register_error_handlers(app: Flask) -> None:
    """
    Registra todos os error handlers na aplicacao Flask.

    Args:
        app: Instancia da aplicacao Flask.
    """

    @app.errorhandler(TarefaValidationError)
    def handle_tarefa_validation(e):
        """Data vazia ou campo invalido: 400 com a mensagem de dominio."""
        return jsonify({"Erro": e.message}), 400

    @app.errorhandler(TarefaNotFoundError)
    def handle_tarefa_not_found(e):
        """Tarefa inexistente: 404 sem corpo."""
        return ("", 404)

    @app.errorhandler(400)
    def handle_bad_request(e):
        return api_error_response("Bad request", 400, getattr(e, "description", None))

    @app.errorhandler(404)
    def handle_not_found(e):
        return api_error_response("Resource not found", 404)

    @app.errorhandler(405)
    def handle_method_not_allowed(e):
        return api_error_response("Method not allowed", 405)

    @app.errorhandler(429)
    def handle_rate_limit(e):
        """
        Trata erros 429 - Rate limit excedido.

        Registra excecao e retorna mensagem apropriada.
        """
        log_exception(e, request)
        return api_error_response(
            "Rate limit exceeded",
            429,
            "Too many requests. Please wait before trying again."
        )

    @app.errorhandler(500)
    def handle_internal_error(e):
        """
        Trata erros 500 - Erro interno do servidor.

        Registra excecao, faz rollback de transacoes pendentes
        e retorna mensagem apropriada.
        """
        log_exception(getattr(e, "original_exception", None) or e, request)

        # Rollback de transacoes pendentes
        db.session.rollback()

        return api_error_response(
            "Internal server error",
            500,
            "An unexpected error occurred. Please try again later."
        )

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(e):
        """
        Trata erros de banco de dados.

        Registra excecao, faz rollback da transacao falha
        e retorna mensagem apropriada.
        """
        log_exception(e, request)

        # Rollback da transacao falha
        db.session.rollback()

        return api_error_response(
            "Database error",
            500,
            "A database error occurred. Please try again."
        )
