"""
In-memory models for the chat hub
"""

from .chat_models import Message, MessageIdGenerator, MessageKind, User
from .errors import AlreadyJoinedError, InvalidNameError, JoinError, NameTakenError
from .message_history import DEFAULT_HISTORY_LIMIT, MessageHistory
from .presence_registry import MAX_NAME_LENGTH, PresenceRegistry

__all__ = [
    'Message', 'MessageIdGenerator', 'MessageKind', 'User',
    'JoinError', 'InvalidNameError', 'NameTakenError', 'AlreadyJoinedError',
    'MessageHistory', 'DEFAULT_HISTORY_LIMIT',
    'PresenceRegistry', 'MAX_NAME_LENGTH',
]
