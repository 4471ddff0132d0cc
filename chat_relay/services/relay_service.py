"""
Relay Service - Sends an adapted payload to the provider and returns the answer text.
"""

import logging

from chat_relay.core.errors import UnrecognizedProviderResponse
from chat_relay.models.chat_models import ProviderPayload
from chat_relay.services.response_extractor import extract_text

logger = logging.getLogger(__name__)


class RelayService:
    """
    Stateless glue between the request adapter, the provider client and the
    response extractor. The client only needs a generate(payload) method.
    """

    def __init__(self, client):
        self.client = client

    def complete(self, payload: ProviderPayload) -> str:
        """
        Run one provider call.

        Raises:
            ProviderFailure: the call failed or the reply held no recognizable text
        """
        attachments = payload.attachments
        logger.info(
            f"Calling provider: {len(payload.contents)} contents, "
            f"{len(attachments)} attachments ({sum(a.size_kb for a in attachments):.1f} KB)"
        )

        response = self.client.generate(payload)
        extraction = extract_text(response)

        if not extraction.recognized:
            raise UnrecognizedProviderResponse("Provider response did not contain text at any known path")

        logger.info(f"Provider answered via {extraction.matched_path} ({len(extraction.text)} chars)")
        return extraction.text
