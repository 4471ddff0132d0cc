"""
Models module for data structures and schemas.
"""

from .chat_models import (
    Attachment,
    ChatMessage,
    Content,
    ContentPart,
    MessageRole,
    ProviderPayload,
)

__all__ = ["Attachment", "ChatMessage", "Content", "ContentPart", "MessageRole", "ProviderPayload"]
