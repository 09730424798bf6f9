import os
import enum
from datetime import timedelta
from flask import Flask
from flask.json.provider import DefaultJSONProvider
from dotenv import load_dotenv
from extensions import db, migrate, limiter, jwt
from auth import auth_bp
from auth.utils import init_jwt_manager
from chat import chat_bp

load_dotenv()

class EnumJSONProvider(DefaultJSONProvider):
    def default(self, o):
        if isinstance(o, enum.Enum):
            return o.value
        return super().default(o)

def create_app(config=None):
    app = Flask(__name__, instance_relative_config=True)

    app.config.from_mapping(
        SECRET_KEY=os.getenv('SECRET_KEY', 'dev'),
        JWT_SECRET_KEY=os.getenv('JWT_SECRET_KEY', os.getenv('SECRET_KEY', 'dev')),
        SQLALCHEMY_DATABASE_URI=os.getenv(
            'DATABASE_URL', f"sqlite:///{os.path.join(app.instance_path, 'app.db')}"
        ),
        SQLALCHEMY_TRACK_MODIFICATIONS=False,

        JWT_ACCESS_TOKEN_EXPIRES=timedelta(days=1),
        JWT_TOKEN_LOCATION=["headers", "cookies"],
        JWT_COOKIE_SECURE=True,
        JWT_COOKIE_SAMESITE="Lax",
        JWT_COOKIE_CSRF_PROTECT=True,

        RATELIMIT_HEADERS_ENABLED=True,
        RATELIMIT_ENABLED=os.getenv("RATELIMIT_ENABLED", "1") == "1",

        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        CHAT_MAX_MESSAGE_LENGTH=int(os.getenv("CHAT_MAX_MESSAGE_LENGTH", 10000)),
    )
    if config:
        app.config.update(config)

    # Handle PostgreSQL URL format for SQLAlchemy 2.0+
    if app.config['SQLALCHEMY_DATABASE_URI'].startswith('postgres://'):
        app.config['SQLALCHEMY_DATABASE_URI'] = (
            app.config['SQLALCHEMY_DATABASE_URI'].replace('postgres://', 'postgresql://', 1)
        )

    app.logger.setLevel(app.config["LOG_LEVEL"])

    os.makedirs(app.instance_path, exist_ok=True)

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)

    app.json_provider_class = EnumJSONProvider
    app.json = app.json_provider_class(app)

    app.register_blueprint(auth_bp)
    app.register_blueprint(chat_bp)

    init_jwt_manager(app, jwt)

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=int(os.getenv('PORT', 5000)), debug=True)
