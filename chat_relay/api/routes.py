# API Routes Blueprint
from flask import Blueprint, current_app, jsonify, request

from chat_relay.api.responses import relay
from chat_relay.core.config import DEFAULT_FILE_PROMPT
from chat_relay.services.request_adapter import build_chat_payload, build_multipart_payload
from chat_relay.utils.file_utils import read_upload

api = Blueprint("api", __name__)


@api.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint."""
    client = current_app.extensions["gemini_client"]
    return jsonify({"status": "ok", "model": getattr(client, "model", None)})


@api.route("/chat", methods=["POST"])
def chat():
    """
    Chat endpoint.

    JSON body:
    {
        "messages": [
            {"role": "user", "content": "Hi"},
            {"role": "assistant", "content": "Hello! How can I help?"},
            {"role": "user", "content": "Explain base64"}
        ]
    }

    or multipart form with "prompt" and an optional "file".

    Response:
    {
        "result": "Base64 is ..."
    }
    """

    def build_payload():
        if request.is_json:
            data = request.get_json(silent=True)
            messages = data.get("messages") if isinstance(data, dict) else None
            return build_chat_payload(messages)

        attachment = read_upload(request.files.get("file"), required=False)
        return build_multipart_payload(request.form.get("prompt"), attachment, DEFAULT_FILE_PROMPT)

    return relay(build_payload)
