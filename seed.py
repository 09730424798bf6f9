# one-click seed for a local admin chat playground

from app import create_app
from extensions import db
from auth.models import User, UserRole
from auth.utils import issue_access_token
from chat.models import ChatMessage, Feedback, FeedbackStatus, Sender

ADMIN_EMAIL = "admin@example.com"
USER_EMAIL = "usuario@example.com"

def get_or_create_user(email: str, nome: str, papel: UserRole) -> User:
    user = User.query.filter_by(email=email).first()
    if user is None:
        user = User(email=email, nome=nome, papel=papel.value)
        db.session.add(user)
        db.session.flush()
    return user

def seed_demo():
    """
    Admin + regular user + one `novo` ticket holding a single unread user message.
    Safe to re-run: users are reused, a fresh ticket is created each time.
    """
    admin = get_or_create_user(ADMIN_EMAIL, "Admin", UserRole.ADMIN)
    user = get_or_create_user(USER_EMAIL, "Usuário", UserRole.USER)

    ticket = Feedback(
        usuario_id=user.id,
        mensagem="O app fecha sozinho ao abrir o chat.",
        status=FeedbackStatus.NOVO.value,
    )
    db.session.add(ticket)
    db.session.flush()

    db.session.add(ChatMessage(
        feedback_id=ticket.id,
        remetente=Sender.USER.value,
        mensagem=ticket.mensagem,
        lida=False,
    ))
    db.session.commit()
    return {"admin_id": admin.id, "user_id": user.id, "feedback_id": ticket.id}

if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        db.create_all()
        ids = seed_demo()
        admin = db.session.get(User, ids["admin_id"])
        print(f"✅ Seeded feedback #{ids['feedback_id']}")
        print(f"   Admin token: {issue_access_token(admin)}")
