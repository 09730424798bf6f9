from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from flask import current_app

from extensions import db
from auth.utils import Identity
from chat.errors import BadRequest, Forbidden, NotFound, ServerError
from chat.models import FeedbackStatus, Sender
from chat.repositories import FeedbackRepo, MessagesRepo

ACCESS_DENIED = "Acesso negado. Apenas administradores."
EMPTY_MESSAGE = "Mensagem não pode estar vazia"
FEEDBACK_NOT_FOUND = "Feedback não encontrado"
REPLY_SENT = "Resposta enviada com sucesso"
REPLY_FAILED = "Erro ao enviar resposta"


class BaseService:
    def __init__(self):
        self.session = db.session

    @contextmanager
    def atomic(self):
        try:
            yield
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def ensure_found(self, obj: Any, *, message: str = "Object not found"):
        if obj is None:
            raise NotFound(message)
        return obj


def ensure_admin(identity: Optional[Identity]) -> Identity:
    if identity is None or not identity.is_admin:
        raise Forbidden(ACCESS_DENIED)
    return identity


class ThreadService(BaseService):
    """
    Admin side of the feedback chat. Each public method runs as one
    transaction: either every statement lands or none does.
    """

    def __init__(self):
        super().__init__()
        self.feedback = FeedbackRepo(self.session)
        self.messages = MessagesRepo(self.session)

    def fetch_thread(self, identity: Optional[Identity], feedback_id: int) -> List[Dict[str, Any]]:
        """
        Return the thread oldest-first, then mark the user's messages read and
        move a `novo` ticket to `lido`. The returned rows carry the read flags
        as they were before this call.
        """
        ensure_admin(identity)
        with self.atomic():
            thread = [m.to_dict() for m in self.messages.thread(feedback_id)]
            marked = self.messages.mark_user_messages_read(feedback_id)
            flipped = self.feedback.mark_read(feedback_id)

        current_app.logger.debug(
            "[chat] feedback %s viewed by admin %s: %d message(s) marked read, status flipped=%s",
            feedback_id, identity.user_id, marked, bool(flipped),
        )
        return thread

    def submit_reply(self, identity: Optional[Identity], feedback_id: int, body: Any) -> Dict[str, Any]:
        ensure_admin(identity)
        body = self.validate_body(body)

        with self.atomic():
            self.ensure_found(self.feedback.get(feedback_id), message=FEEDBACK_NOT_FOUND)
            message_id = self.messages.insert(feedback_id, Sender.ADMIN, body)
            self.feedback.set_status(feedback_id, FeedbackStatus.RESPONDIDO)
            created = self.messages.get(message_id)
            if created is None:
                current_app.logger.error(
                    "[chat] message %s for feedback %s vanished after insert", message_id, feedback_id,
                )
                raise ServerError(REPLY_FAILED)
            payload = created.to_dict()

        current_app.logger.info(
            "[chat] admin %s replied to feedback %s (message %s)",
            identity.user_id, feedback_id, message_id,
        )
        return payload

    @staticmethod
    def validate_body(body: Any) -> str:
        if not isinstance(body, str) or body.strip() == "":
            raise BadRequest(EMPTY_MESSAGE)
        max_len = current_app.config.get("CHAT_MAX_MESSAGE_LENGTH")
        if max_len and len(body) > max_len:
            raise BadRequest(f"Mensagem muito longa (máx. {max_len})", details={"max_length": max_len})
        return body
