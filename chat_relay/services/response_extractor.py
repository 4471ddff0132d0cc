"""
Response Extractor - Pulls the answer text out of a Gemini reply.

The reply shape differs between the REST API and the SDK wrappers, so the text
is looked up through an ordered list of accessors. The first accessor that
finds a non-empty string wins. When none does, the whole reply is dumped as
pretty-printed JSON; that dump is a debugging aid and is logged as such.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True)
class Extraction:
    """Result of probing a provider reply."""

    text: str
    matched_path: Optional[str] = None

    @property
    def recognized(self) -> bool:
        return self.matched_path is not None


def _get(obj: Any, key: Any) -> Any:
    """Read a dict key, list index or object attribute; _MISSING when absent."""
    if obj is None:
        return _MISSING
    if isinstance(key, int):
        if isinstance(obj, (list, tuple)) and -len(obj) <= key < len(obj):
            return obj[key]
        return _MISSING
    if isinstance(obj, dict):
        return obj.get(key, _MISSING)
    return getattr(obj, key, _MISSING)


def _dig(obj: Any, *keys: Any) -> Optional[str]:
    for key in keys:
        obj = _get(obj, key)
        if obj is _MISSING:
            return None
    if isinstance(obj, str) and obj:
        return obj
    return None


def wrapped_candidate_part_text(response: Any) -> Optional[str]:
    """response.candidates[0].content.parts[0].text"""
    return _dig(response, "response", "candidates", 0, "content", "parts", 0, "text")


def candidate_part_text(response: Any) -> Optional[str]:
    """candidates[0].content.parts[0].text"""
    return _dig(response, "candidates", 0, "content", "parts", 0, "text")


def wrapped_candidate_content_text(response: Any) -> Optional[str]:
    """response.candidates[0].content.text"""
    return _dig(response, "response", "candidates", 0, "content", "text")


def candidate_content_text(response: Any) -> Optional[str]:
    """candidates[0].content.text"""
    return _dig(response, "candidates", 0, "content", "text")


CANDIDATE_PATHS: List[Tuple[str, Callable[[Any], Optional[str]]]] = [
    ("response.candidates[0].content.parts[0].text", wrapped_candidate_part_text),
    ("candidates[0].content.parts[0].text", candidate_part_text),
    ("response.candidates[0].content.text", wrapped_candidate_content_text),
    ("candidates[0].content.text", candidate_content_text),
]


def dump_response(response: Any) -> str:
    """Pretty-printed JSON of the reply; repr() if it cannot be serialized."""
    try:
        return json.dumps(response, indent=2, ensure_ascii=False, default=str)
    except Exception as e:
        logger.error(f"Could not serialize provider response: {e}")
        return repr(response)


def extract_text(response: Any) -> Extraction:
    """
    Return the most likely answer text in a provider reply.

    Never raises. If no candidate path resolves, the returned Extraction holds
    the serialized reply and has matched_path None.
    """
    try:
        for path, accessor in CANDIDATE_PATHS:
            text = accessor(response)
            if text is not None:
                return Extraction(text=text, matched_path=path)
    except Exception as e:
        logger.error(f"Error extracting text: {e}")

    dump = dump_response(response)
    logger.warning(f"Unrecognized provider response, falling back to raw dump (debug only):\n{dump}")
    return Extraction(text=dump)
