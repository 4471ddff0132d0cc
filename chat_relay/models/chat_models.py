"""
Chat Models - Data structures for relay requests and provider payloads.
"""

import base64
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any
from enum import Enum


class MessageRole(Enum):
    """Role of the message sender."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"

    @classmethod
    def parse(cls, value: Optional[str]) -> "MessageRole":
        """Parse a client role, accepting the aliases browsers and other APIs use."""
        role = (value or "user").strip().lower()
        if role in ("assistant", "model", "bot", "ai"):
            return cls.ASSISTANT
        if role == "system":
            return cls.SYSTEM
        if role in ("user", "human"):
            return cls.USER
        raise ValueError(f"Unknown role '{value}'")

    @property
    def provider_role(self) -> str:
        # Gemini only knows "user" and "model"
        return "model" if self is MessageRole.ASSISTANT else "user"


@dataclass
class ChatMessage:
    """Represents a single chat message."""

    role: MessageRole
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role.value, "content": self.content}


@dataclass
class Attachment:
    """Uploaded binary file, kept in memory for the duration of one request."""

    mime_type: str
    data: bytes
    filename: str = ""

    @property
    def size_kb(self) -> float:
        return len(self.data) / 1024

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


@dataclass
class ContentPart:
    """One part of a provider content entry: text or inline binary data."""

    text: Optional[str] = None
    attachment: Optional[Attachment] = None

    def to_dict(self) -> Dict[str, Any]:
        if self.attachment is not None:
            return {
                "inlineData": {
                    "mimeType": self.attachment.mime_type,
                    "data": self.attachment.to_base64(),
                }
            }
        return {"text": self.text or ""}


@dataclass
class Content:
    """A turn in the provider conversation."""

    role: str
    parts: List[ContentPart] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role, "parts": [p.to_dict() for p in self.parts]}


@dataclass
class ProviderPayload:
    """Request body for the Gemini generateContent endpoint."""

    contents: List[Content] = field(default_factory=list)
    generation_config: Dict[str, Any] = field(default_factory=dict)

    @property
    def attachments(self) -> List[Attachment]:
        return [p.attachment for c in self.contents for p in c.parts if p.attachment is not None]

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"contents": [c.to_dict() for c in self.contents]}
        if self.generation_config:
            body["generationConfig"] = dict(self.generation_config)
        return body
