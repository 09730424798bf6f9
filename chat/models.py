from datetime import datetime, timezone
from enum import Enum
from sqlalchemy import CheckConstraint, Index, ForeignKey
from extensions import db

utcnow = lambda: datetime.now(timezone.utc)


def as_utc(dt):
    """SQLite hands back naive datetimes; they were written as UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)

# ─────────────────────────────────────────────────────────────────────────────
# Closed value sets, persisted as plain strings (CHECK constraints keep them
# portable across SQLite/MySQL/Postgres)
# ─────────────────────────────────────────────────────────────────────────────
class FeedbackStatus(str, Enum):
    NOVO = "novo"
    LIDO = "lido"
    RESPONDIDO = "respondido"

class Sender(str, Enum):
    USER = "usuario"
    ADMIN = "admin"

STATUS_VALUES = tuple(s.value for s in FeedbackStatus)
SENDER_VALUES = tuple(s.value for s in Sender)


class Feedback(db.Model):
    """A feedback submission; anchors one chat thread."""
    __tablename__ = "feedback"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)

    # Submitted by a regular user elsewhere in the product
    usuario_id = db.Column(db.Integer, ForeignKey("users.id"), nullable=True, index=True)
    mensagem = db.Column(db.Text, nullable=False, default="")

    status = db.Column(db.String(20), nullable=False, default=FeedbackStatus.NOVO.value)
    data = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint(f"status IN {STATUS_VALUES}", name="ck_feedback_status"),
    )


class ChatMessage(db.Model):
    __tablename__ = "mensagens_chat"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    feedback_id = db.Column(db.Integer, ForeignKey("feedback.id", ondelete="CASCADE"), nullable=False, index=True)

    remetente = db.Column(db.String(20), nullable=False)
    mensagem = db.Column(db.Text, nullable=False)
    data = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    lida = db.Column(db.Boolean, nullable=False, default=False)

    __table_args__ = (
        CheckConstraint(f"remetente IN {SENDER_VALUES}", name="ck_mensagens_chat_remetente"),
        Index("ix_mensagens_chat_feedback_data", "feedback_id", "data"),
    )

    @property
    def sender(self) -> Sender:
        return Sender(self.remetente)

    def to_dict(self):
        return {
            "id": self.id,
            "feedback_id": self.feedback_id,
            "remetente": self.sender,
            "mensagem": self.mensagem,
            "data": as_utc(self.data).isoformat() if self.data else None,
            "lida": bool(self.lida),
        }
