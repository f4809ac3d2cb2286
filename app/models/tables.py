"""Database models used by the application."""

from enum import Enum

from app import db


class EnumStatusTarefa(Enum):
    """Enumeration of possible task states."""
    PENDENTE = "Pendente"
    EM_ANDAMENTO = "EmAndamento"
    FINALIZADO = "Finalizado"


class Tarefa(db.Model):
    """A to-do item with title, description, date and status."""
    __tablename__ = "tarefas"

    id = db.Column(db.Integer, primary_key=True)
    titulo = db.Column(db.String(255))
    descricao = db.Column(db.Text)
    data = db.Column(db.DateTime, nullable=False, index=True)
    status = db.Column(
        db.Enum(EnumStatusTarefa),
        nullable=False,
        default=EnumStatusTarefa.PENDENTE,
        index=True,
    )

    def __repr__(self):
        return f"<Tarefa {self.id} {self.titulo!r} {self.status}>"
