from datetime import datetime, timedelta, timezone

import pytest
from flask_jwt_extended import create_access_token

from app import create_app
from extensions import db
from auth.models import User, UserRole
from chat.models import ChatMessage, Feedback, FeedbackStatus

TEST_CONFIG = {
    "TESTING": True,
    "SECRET_KEY": "test-secret-key-that-is-long-enough-for-hs256",
    "JWT_SECRET_KEY": "test-jwt-secret-key-that-is-long-enough-for-hs256",
    "SQLALCHEMY_DATABASE_URI": "sqlite://",
    "RATELIMIT_ENABLED": False,
}

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def app():
    app = create_app(TEST_CONFIG)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


def _make_user(app, email, papel, is_blocked=False):
    with app.app_context():
        user = User(email=email, nome=email.split("@")[0], papel=papel.value, is_blocked=is_blocked)
        db.session.add(user)
        db.session.commit()
        return user.id


def _bearer(app, user_id):
    with app.app_context():
        return {"Authorization": f"Bearer {create_access_token(identity=str(user_id))}"}


@pytest.fixture()
def admin_id(app):
    return _make_user(app, "admin@example.com", UserRole.ADMIN)


@pytest.fixture()
def user_id(app):
    return _make_user(app, "usuario@example.com", UserRole.USER)


@pytest.fixture()
def admin_headers(app, admin_id):
    return _bearer(app, admin_id)


@pytest.fixture()
def user_headers(app, user_id):
    return _bearer(app, user_id)


@pytest.fixture()
def make_feedback(app):
    """
    make_feedback(status, [(sender, body, lida), ...]) -> feedback id.
    Messages get increasing timestamps in list order unless an explicit
    4th tuple item (a datetime) is supplied.
    """
    def _make(status=FeedbackStatus.NOVO, messages=()):
        with app.app_context():
            fb = Feedback(mensagem="feedback", status=status.value)
            db.session.add(fb)
            db.session.flush()
            for i, item in enumerate(messages):
                sender, body, lida = item[:3]
                when = item[3] if len(item) > 3 else BASE_TIME + timedelta(minutes=i)
                db.session.add(ChatMessage(
                    feedback_id=fb.id, remetente=sender.value, mensagem=body, lida=lida, data=when,
                ))
            db.session.commit()
            return fb.id
    return _make


@pytest.fixture()
def snapshot(app):
    """Raw state of a ticket straight from the database."""
    def _snap(feedback_id):
        with app.app_context():
            fb = db.session.get(Feedback, feedback_id)
            rows = (ChatMessage.query
                    .filter_by(feedback_id=feedback_id)
                    .order_by(ChatMessage.id.asc())
                    .all())
            return {
                "status": fb.status if fb else None,
                "messages": [(m.remetente, m.mensagem, m.lida) for m in rows],
            }
    return _snap


@pytest.fixture()
def message_count(app):
    def _count():
        with app.app_context():
            return ChatMessage.query.count()
    return _count


@pytest.fixture()
def make_user(app):
    def _make(email, papel=UserRole.USER, is_blocked=False):
        return _make_user(app, email, papel, is_blocked=is_blocked)
    return _make


@pytest.fixture()
def bearer(app):
    def _headers(user_id):
        return _bearer(app, user_id)
    return _headers
