"""
Registro de rotas da aplicacao.

Blueprints:
    - tarefa_bp: CRUD de tarefas (/Tarefa)
"""

from flask import Flask

from app.controllers.routes._error_handlers import register_error_handlers


def register_blueprints(flask_app: Flask) -> None:
    """
    Registra todos os blueprints e error handlers da aplicacao.

    Args:
        flask_app: Instancia da aplicacao Flask.
    """
    from app.controllers.routes.tarefa import tarefa_bp

    flask_app.register_blueprint(tarefa_bp)

    register_error_handlers(flask_app)
