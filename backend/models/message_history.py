"""
Bounded message history for the chat hub.
Lives for the whole process, independent of any connection.
"""

from collections import deque
from typing import List, Optional

from .chat_models import Message


DEFAULT_HISTORY_LIMIT = 200


class MessageHistory:
    """Ring buffer of the most recent messages, oldest evicted first"""

    def __init__(self, capacity: int = DEFAULT_HISTORY_LIMIT):
        if not 1 <= capacity <= DEFAULT_HISTORY_LIMIT:
            raise ValueError(f"History capacity must be between 1 and {DEFAULT_HISTORY_LIMIT}")
        self.capacity = capacity
        self._messages = deque(maxlen=capacity)

    def append(self, message: Message):
        # deque(maxlen) drops from the left once full
        self._messages.append(message)

    def find(self, message_id) -> Optional[Message]:
        for message in self._messages:
            if message.id == message_id:
                return message
        return None

    def remove(self, message_id) -> Optional[Message]:
        message = self.find(message_id)
        if message is not None:
            self._messages.remove(message)
        return message

    def snapshot(self) -> List[Message]:
        return list(self._messages)

    def __len__(self):
        return len(self._messages)
