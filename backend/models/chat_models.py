"""
Chat and presence models for the chat hub.
"""

import time
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class MessageKind(str, Enum):
    TEXT = "text"
    FILE = "file"


@dataclass(frozen=True)
class User:
    id: str
    name: str

    def to_dict(self):
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class Message:
    id: int
    kind: MessageKind
    content: str
    user: User  # author as it was at send time
    reply_to: Optional[int] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self):
        return {
            "id": self.id,
            "type": self.kind.value,
            "content": self.content,
            "user": self.user.to_dict(),
            "replyTo": self.reply_to,
            "timestamp": self.timestamp.isoformat(),
        }

    def __repr__(self):
        return f"<Message {self.id} from {self.user.name}>"


class MessageIdGenerator:
    """Millisecond timestamp ids, bumped so that no two are ever equal"""

    def __init__(self, clock=time.time):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            now_ms = int(self._clock() * 1000)
            self._last = max(now_ms, self._last + 1)
            return self._last
