# Shared request handling for the relay endpoints
import logging
from typing import Callable

from flask import current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from chat_relay.core.errors import InvalidInput, ProviderFailure
from chat_relay.models.chat_models import ProviderPayload
from chat_relay.services.relay_service import RelayService

logger = logging.getLogger(__name__)


def get_relay_service() -> RelayService:
    """Relay service created by the application factory."""
    return current_app.extensions["relay_service"]


def relay(build_payload: Callable[[], ProviderPayload]):
    """
    Build the payload, call the provider and wrap the answer as {"result": ...}.

    InvalidInput -> 400 with its message; ProviderFailure and anything
    unexpected -> 500 with a generic message, details in the server log.
    """
    try:
        payload = build_payload()
        result = get_relay_service().complete(payload)
        return jsonify({"result": result})

    except InvalidInput as e:
        logger.info(f"Rejected request to {request.path}: {e.message}")
        return jsonify(e.to_dict()), e.status_code

    except ProviderFailure as e:
        logger.exception(f"Provider failure in {request.path}: {e.message}")
        return jsonify(e.to_dict()), e.status_code

    except HTTPException:
        # e.g. 413 from an oversized upload, handled by the app
        raise

    except Exception as e:
        logger.exception(f"Error in {request.path} endpoint: {e}")
        return jsonify({"error": ProviderFailure.public_message}), 500
