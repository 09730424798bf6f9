from typing import Any, List, Optional
from extensions import db
from chat.models import ChatMessage, Feedback, FeedbackStatus, Sender


class BaseRepo:
    def __init__(self, session=None):
        self.session = session or db.session

    def add(self, obj: Any):
        self.session.add(obj)
        return obj


class FeedbackRepo(BaseRepo):
    """Data access for the `feedback` table."""

    def get(self, feedback_id: int) -> Optional[Feedback]:
        return self.session.get(Feedback, feedback_id)

    def mark_read(self, feedback_id: int) -> int:
        """novo -> lido; any other status is left alone."""
        return (
            self.session.query(Feedback)
            .filter(Feedback.id == feedback_id, Feedback.status == FeedbackStatus.NOVO.value)
            .update({Feedback.status: FeedbackStatus.LIDO.value}, synchronize_session=False)
        )

    def set_status(self, feedback_id: int, status: FeedbackStatus) -> int:
        return (
            self.session.query(Feedback)
            .filter(Feedback.id == feedback_id)
            .update({Feedback.status: status.value}, synchronize_session=False)
        )


class MessagesRepo(BaseRepo):
    """Data access for the `mensagens_chat` table."""

    def thread(self, feedback_id: int) -> List[ChatMessage]:
        return (
            self.session.query(ChatMessage)
            .filter(ChatMessage.feedback_id == feedback_id)
            .order_by(ChatMessage.data.asc(), ChatMessage.id.asc())
            .all()
        )

    def mark_user_messages_read(self, feedback_id: int) -> int:
        return (
            self.session.query(ChatMessage)
            .filter(
                ChatMessage.feedback_id == feedback_id,
                ChatMessage.remetente == Sender.USER.value,
                ChatMessage.lida.is_(False),
            )
            .update({ChatMessage.lida: True}, synchronize_session=False)
        )

    def insert(self, feedback_id: int, sender: Sender, body: str) -> int:
        msg = ChatMessage(
            feedback_id=feedback_id,
            remetente=sender.value,
            mensagem=body,
            lida=False,
        )
        self.add(msg)
        self.session.flush()
        return msg.id

    def get(self, message_id: int) -> Optional[ChatMessage]:
        # populate_existing: always re-read the row, never trust the identity map
        return (
            self.session.query(ChatMessage)
            .populate_existing()
            .filter(ChatMessage.id == message_id)
            .one_or_none()
        )
