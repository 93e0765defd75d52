"""
Inbound requests handled by the broadcast hub.
Socket.IO payloads are parsed into one of these variants before dispatch.
"""

from dataclasses import dataclass
from typing import Optional

from backend.models.chat_models import MessageKind


@dataclass(frozen=True)
class JoinRequest:
    name: object


@dataclass(frozen=True)
class ChatMessageRequest:
    kind: MessageKind
    content: str
    reply_to: Optional[int] = None


@dataclass(frozen=True)
class DeleteMessageRequest:
    message_id: int


@dataclass(frozen=True)
class TypingRequest:
    is_typing: bool


@dataclass(frozen=True)
class DisconnectRequest:
    reason: Optional[str] = None


def _is_message_id(value):
    # bool is an int subclass but never a valid id
    return isinstance(value, int) and not isinstance(value, bool)


def parse_join(payload):
    """Accept either a bare name or {"name": ...}"""
    if isinstance(payload, dict):
        payload = payload.get("name")
    return JoinRequest(name=payload)


def parse_chat_message(payload):
    """Returns None for payloads that cannot become a message"""
    if not isinstance(payload, dict):
        return None

    try:
        kind = MessageKind(payload.get("type"))
    except ValueError:
        return None

    content = payload.get("content")
    if not isinstance(content, str) or not content.strip():
        return None

    reply_to = payload.get("replyTo")
    if not _is_message_id(reply_to):
        reply_to = None

    return ChatMessageRequest(kind=kind, content=content, reply_to=reply_to)


def parse_delete_message(payload):
    """Accept either a bare message id or {"messageId": ...}"""
    if isinstance(payload, dict):
        payload = payload.get("messageId")
    if not _is_message_id(payload):
        return None
    return DeleteMessageRequest(message_id=payload)
