from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException

from extensions import limiter
from . import chat_bp
from .authz import admin_required
from .common import parse_feedback_id, get_json_object
from .errors import ChatError, ServerError
from .services import ThreadService, REPLY_SENT, REPLY_FAILED

svc = ThreadService()


# Health probe
@chat_bp.get("/_health")
@limiter.exempt
def _health():
    return jsonify({"ok": True, "service": "chat"}), 200


@chat_bp.get("/feedback/<feedback_id>")
@admin_required
def feedback_thread(feedback_id: str, identity):
    fid = parse_feedback_id(feedback_id)
    try:
        mensagens = svc.fetch_thread(identity, fid)
    except ChatError:
        raise
    except Exception:
        current_app.logger.exception("[chat] failed to load messages for feedback %s", fid)
        raise ServerError("Erro ao buscar mensagens")
    return jsonify({"mensagens": mensagens}), 200


@chat_bp.post("/feedback/<feedback_id>")
@admin_required
def feedback_reply(feedback_id: str, identity):
    fid = parse_feedback_id(feedback_id)
    body = get_json_object().get("mensagem")
    try:
        mensagem = svc.submit_reply(identity, fid, body)
    except ChatError:
        raise
    except Exception:
        current_app.logger.exception("[chat] failed to send admin reply to feedback %s", fid)
        raise ServerError(REPLY_FAILED)
    return jsonify({
        "success": True,
        "message": REPLY_SENT,
        "mensagem": mensagem,
    }), 201


# Centralized error handling for ChatError and unexpected exceptions
@chat_bp.app_errorhandler(ChatError)
def handle_chat_error(err: ChatError):
    return jsonify(err.to_dict()), err.status_code


@chat_bp.app_errorhandler(Exception)
def handle_uncaught_error(err: Exception):
    if isinstance(err, HTTPException):
        return err
    current_app.logger.exception("[chat] unhandled error: %r", err)
    payload = ServerError("Something went wrong").to_dict()
    if current_app.debug:
        payload["error"]["details"] = {"exception": repr(err)}
    return jsonify(payload), 500
