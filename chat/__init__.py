from flask import Blueprint
import click

chat_bp = Blueprint("chat", __name__, url_prefix="/api/chat")


@chat_bp.cli.command("init-db")
@click.option("--drop", is_flag=True, help="Drop existing tables first")
def init_db(drop: bool):
    """
    Create the users/feedback/mensagens_chat tables.
    Usage:
        flask chat init-db
        flask chat init-db --drop
    """
    from extensions import db
    if drop:
        db.drop_all()
        click.echo("Dropped all tables.")
    db.create_all()
    click.echo("Tables created.")


# Make sure models are imported so Alembic detects them
from auth import models as _auth_models  # noqa: E402,F401
from . import models  # noqa: E402,F401
from . import routes  # noqa: E402,F401
