"""
Prompt Extraction Module

Flattens OpenAI style chat payloads into plain text for the prompt log, and
fingerprints the calling developer tool from its User-Agent.
"""

import json
import logging
from enum import Enum
from typing import Any, Optional

logger = logging.getLogger(__name__)


class ContentKind(str, Enum):
    """Shape of a chat message `content` field"""

    TEXT = "text"
    PARTS = "parts"
    UNKNOWN = "unknown"


# Checked in order, first match wins
_TOOL_SIGNATURES: list[tuple[str, str]] = [
    ("cursor", "Cursor"),
    ("continue", "Continue.dev"),
    ("cody", "Cody"),
    ("vscode", "VS Code"),
    ("openai", "OpenAI"),
]

UNKNOWN_TOOL = "Unknown"


def to_json_text(value: Any) -> str:
    """Compact JSON text, the same shape JavaScript's JSON.stringify produces."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)


def classify_content(content: Any) -> ContentKind:
    if isinstance(content, str):
        return ContentKind.TEXT
    if isinstance(content, list):
        return ContentKind.PARTS
    return ContentKind.UNKNOWN


def _part_text(part: Any) -> str:
    if part is None:
        raise TypeError("null content part")
    if isinstance(part, dict):
        text = part.get("text")
        if text:
            return str(text)
    return to_json_text(part)


def _message_text(message: Any) -> str:
    if message is None:
        raise TypeError("null message")
    content = message.get("content") if isinstance(message, dict) else None
    kind = classify_content(content)
    if kind is ContentKind.TEXT:
        return content
    if kind is ContentKind.PARTS:
        return " ".join(_part_text(part) for part in content)
    return to_json_text(message)


def extract_prompt_text(body: Any) -> str:
    """
    Extract a flat prompt text from a chat completion request body

    One line per message. String content is kept verbatim, content part lists
    are joined with a space, anything else is logged as the message JSON.
    Bodies without a `messages` list, or with a null message or content
    part, are logged as JSON.

    Never raises.

    Args:
        body: Parsed request body

    Returns:
        str: Prompt text
    """
    try:
        messages = body.get("messages") if isinstance(body, dict) else None
        if isinstance(messages, list):
            return "\n".join(_message_text(message) for message in messages)
        return to_json_text(body)
    except Exception:
        logger.debug("Prompt extraction failed, falling back to body JSON", exc_info=True)
        try:
            return to_json_text(body)
        except Exception:
            return str(body)


def detect_tool_name(user_agent: Optional[str]) -> str:
    """
    Best-effort developer tool name from a User-Agent string

    Used as log metadata only.

    Examples:
        >>> detect_tool_name("Cursor/0.42.3")
        'Cursor'
        >>> detect_tool_name(None)
        'Unknown'
    """
    if not user_agent:
        return UNKNOWN_TOOL
    ua = user_agent.lower()
    for signature, tool_name in _TOOL_SIGNATURES:
        if signature in ua:
            return tool_name
    return UNKNOWN_TOOL
