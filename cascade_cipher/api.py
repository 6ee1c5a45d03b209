"""
HTTP API
========
JSON endpoints for the cascade cipher and the chat message store.

    GET    /api/health
    POST   /api/cipher                  {"text","key","startNumber","reverseGroups","operation"}
    GET    /api/messages
    POST   /api/messages                {"sender","content","isEncrypted","cipherKey",...}
    DELETE /api/messages/<id>
    GET    /api/messages/<id>/decoded

Run:  python -m cascade_cipher.api
"""

import logging

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .cipher import CipherRequest, run
from .config import Settings
from .errors import CipherError, RequestError
from .messages import Message, MessageStore

logger = logging.getLogger(__name__)


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        return None, (jsonify({"message": "No JSON data provided"}), 400)
    return data, None


def create_app(settings: Settings = None, store: MessageStore = None) -> Flask:
    """Build the Flask app. Pass a store to share messages across apps or tests."""
    settings = settings or Settings()
    store    = store if store is not None else MessageStore()

    app = Flask(__name__)
    app.config["DEBUG"] = settings.debug
    app.extensions["message_store"] = store
    CORS(app)

    @app.route("/api/health", methods=["GET"])
    def health_check():
        return jsonify({"status": "healthy", "service": "cascade-cipher"})

    @app.route("/api/cipher", methods=["POST"])
    def cipher():
        data, error = _json_body()
        if error:
            return error
        try:
            cipher_request = CipherRequest.from_dict(data)
        except RequestError as e:
            return jsonify(e.to_dict()), 400
        outcome = run(cipher_request)
        return jsonify(outcome.to_dict()), (200 if outcome.ok else 400)

    @app.route("/api/messages", methods=["GET"])
    def list_messages():
        return jsonify([m.to_dict() for m in store.list()])

    @app.route("/api/messages", methods=["POST"])
    def create_message():
        data, error = _json_body()
        if error:
            return error
        try:
            message = store.add(Message.from_dict(data))
        except RequestError as e:
            return jsonify(e.to_dict()), 400
        return jsonify(message.to_dict()), 201

    @app.route("/api/messages/<message_id>", methods=["DELETE"])
    def delete_message(message_id):
        if store.delete(message_id):
            return jsonify({"message": "Message deleted successfully"})
        return jsonify({"message": "Message not found"}), 404

    @app.route("/api/messages/<message_id>/decoded", methods=["GET"])
    def decode_message(message_id):
        try:
            plaintext = store.decode(message_id)
        except KeyError:
            return jsonify({"message": "Message not found"}), 404
        except CipherError as e:
            return jsonify(e.to_dict()), 400
        return jsonify({"result": plaintext})

    @app.errorhandler(Exception)
    def unexpected_error(e):
        if isinstance(e, HTTPException):
            return jsonify({"message": e.description}), e.code
        logger.exception(f"Unhandled error on {request.method} {request.path}")
        return jsonify({"message": "Internal server error",
                        "type": type(e).__name__}), 500

    return app


def main():
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = create_app(settings)
    logger.info(f"Starting cascade cipher API on {settings.host}:{settings.port}")
    app.run(host=settings.host, port=settings.port, debug=settings.debug)


if __name__ == "__main__":
    main()
