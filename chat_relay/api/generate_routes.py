# Single-shot generation endpoints: text, image, document and audio
from typing import Optional

from flask import Blueprint, request

from chat_relay.api.responses import relay
from chat_relay.core.config import DEFAULT_PROMPTS
from chat_relay.core.errors import InvalidInput
from chat_relay.services.request_adapter import build_attachment_payload, build_prompt_payload
from chat_relay.utils.file_utils import read_upload

generate_api = Blueprint("generate_api", __name__)


def _generate_from_file(field: str, required_prefix: Optional[str] = None):
    def build_payload():
        if field not in request.files:
            raise InvalidInput(f"No {field} file provided")
        attachment = read_upload(request.files[field], required_prefix)
        return build_attachment_payload(request.form.get("prompt"), attachment, DEFAULT_PROMPTS[field])

    return relay(build_payload)


@generate_api.route("/generate-text", methods=["POST"])
def generate_text():
    """Body: {"prompt": "..."}"""

    def build_payload():
        data = request.get_json(silent=True)
        prompt = data.get("prompt") if isinstance(data, dict) else None
        return build_prompt_payload(prompt)

    return relay(build_payload)


@generate_api.route("/generate-from-image", methods=["POST"])
def generate_from_image():
    """Multipart: "image" file plus optional "prompt"."""
    return _generate_from_file("image", "image/")


@generate_api.route("/generate-from-document", methods=["POST"])
def generate_from_document():
    """Multipart: "document" file plus optional "prompt"."""
    return _generate_from_file("document")


@generate_api.route("/generate-from-audio", methods=["POST"])
def generate_from_audio():
    """Multipart: "audio" file plus optional "prompt"."""
    return _generate_from_file("audio", "audio/")
