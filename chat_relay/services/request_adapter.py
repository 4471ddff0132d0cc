"""
Request Adapter - Turns inbound prompts, chat histories and uploads into
Gemini generateContent payloads.

Three inbound shapes are supported:
1. Plain prompt string           -> one user turn with one text part
2. Chat message array            -> one turn per message, order preserved
3. Prompt plus binary attachment -> one user turn with a text part and an
                                    inline data part
"""

import logging
from typing import Any, Optional

from chat_relay.core.errors import InvalidInput
from chat_relay.models.chat_models import (
    Attachment,
    ChatMessage,
    Content,
    ContentPart,
    MessageRole,
    ProviderPayload,
)

logger = logging.getLogger(__name__)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def parse_message(index: int, raw: Any) -> ChatMessage:
    """Validate one client message of the form {"role": ..., "content": ...}."""
    if not isinstance(raw, dict):
        raise InvalidInput(f"Message {index} must be an object with 'role' and 'content'.")

    content = raw.get("content")
    if _is_blank(content):
        raise InvalidInput(f"Message {index} must have a non-empty string 'content'.")

    role = raw.get("role")
    if role is not None and not isinstance(role, str):
        raise InvalidInput(f"Message {index} has an invalid 'role'.")
    try:
        parsed_role = MessageRole.parse(role)
    except ValueError:
        raise InvalidInput(f"Message {index} has an unknown role '{role}'.")

    return ChatMessage(role=parsed_role, content=content)


def build_chat_payload(messages: Any) -> ProviderPayload:
    """
    Map a chat history onto provider turns.

    Args:
        messages: List of {"role", "content"} objects from the client

    Returns:
        ProviderPayload with exactly one content entry per message

    Raises:
        InvalidInput: messages is not a non-empty list, or an entry is malformed
    """
    if not isinstance(messages, list) or len(messages) == 0:
        raise InvalidInput("Request body must include a non-empty 'messages' array.")

    contents = []
    for index, raw in enumerate(messages):
        message = parse_message(index, raw)
        contents.append(
            Content(role=message.role.provider_role, parts=[ContentPart(text=message.content)])
        )

    logger.debug(f"Adapted chat history with {len(contents)} messages")
    return ProviderPayload(contents=contents)


def build_prompt_payload(prompt: Any) -> ProviderPayload:
    """Wrap a single prompt as one user turn."""
    if _is_blank(prompt):
        raise InvalidInput("Request body must include a non-empty 'prompt'.")

    return ProviderPayload(contents=[Content(role="user", parts=[ContentPart(text=prompt)])])


def build_attachment_payload(
    prompt: Optional[str],
    attachment: Optional[Attachment],
    default_prompt: str,
) -> ProviderPayload:
    """
    Pair an uploaded file with its prompt.

    The text part comes first, then the inline data part. A blank prompt is
    replaced with default_prompt.
    """
    if attachment is None:
        raise InvalidInput("A file is required for this request.")

    text = default_prompt if _is_blank(prompt) else prompt
    parts = [ContentPart(text=text), ContentPart(attachment=attachment)]
    return ProviderPayload(contents=[Content(role="user", parts=parts)])


def build_multipart_payload(
    prompt: Optional[str],
    attachment: Optional[Attachment],
    default_prompt: str,
) -> ProviderPayload:
    """Multipart chat form: the file is optional, the prompt only when there is no file."""
    if attachment is None:
        return build_prompt_payload(prompt)
    return build_attachment_payload(prompt, attachment, default_prompt)
