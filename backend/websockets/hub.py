"""
Broadcast hub for the chat.
Owns the presence registry and message history and decides which events
go to which connections.
"""

import threading

from backend.models.chat_models import Message, MessageIdGenerator
from backend.models.errors import JoinError
from backend.models.message_history import MessageHistory
from backend.models.presence_registry import PresenceRegistry
from .requests import (
    ChatMessageRequest,
    DeleteMessageRequest,
    DisconnectRequest,
    JoinRequest,
    TypingRequest,
)


# Outbound event names
JOIN_SUCCESS = "join-success"
JOIN_ERROR = "join-error"
UPDATE_USERS = "update-users"
SYSTEM_MESSAGE = "system-message"
CHAT_MESSAGE = "chat message"
MESSAGE_DELETED = "message deleted"
TYPING_STATUS = "typing-status"


class BroadcastHub:
    """
    Processes one request at a time against the shared chat state.

    Every request goes through dispatch(), which holds a single lock for the
    whole handler including fan-out, so handlers never interleave.
    """

    def __init__(self, channel, registry=None, history=None, id_generator=None):
        self.channel = channel
        self.registry = registry if registry is not None else PresenceRegistry()
        self.history = history if history is not None else MessageHistory()
        self.id_generator = id_generator or MessageIdGenerator()
        self._lock = threading.Lock()
        self._handlers = {
            JoinRequest: self._handle_join,
            ChatMessageRequest: self._handle_chat_message,
            DeleteMessageRequest: self._handle_delete_message,
            TypingRequest: self._handle_typing,
            DisconnectRequest: self._handle_disconnect,
        }

    def dispatch(self, sid, request):
        """Route a parsed request from connection `sid` to its handler"""
        handler = self._handlers.get(type(request))
        if handler is None:
            raise TypeError(f"Unhandled hub request: {request!r}")
        with self._lock:
            handler(sid, request)

    def stats(self):
        with self._lock:
            return {"users": len(self.registry), "messages": len(self.history)}

    def _users_payload(self):
        return {"users": [user.to_dict() for user in self.registry.list_all()]}

    def _handle_join(self, sid, request):
        try:
            user = self.registry.join(sid, request.name)
        except JoinError as e:
            print(f"[JOIN] Rejected join from sid {sid}: {e.message}")
            self.channel.send_to(sid, JOIN_ERROR, {"message": e.message})
            return

        print(f"[JOIN] {user.name} joined (sid: {sid}, online: {len(self.registry)})")
        history = [message.to_dict() for message in self.history.snapshot()]
        self.channel.send_to(sid, JOIN_SUCCESS, {"user": user.to_dict(), "history": history})
        self.channel.broadcast(UPDATE_USERS, self._users_payload())
        self.channel.broadcast(SYSTEM_MESSAGE, f"{user.name} has joined.", skip_sid=sid)

    def _handle_chat_message(self, sid, request):
        user = self.registry.get(sid)
        if user is None:
            print(f"[CHAT] Ignored message from unjoined sid {sid}")
            return

        message = Message(
            id=self.id_generator.next_id(),
            kind=request.kind,
            content=request.content,
            user=user,
            reply_to=request.reply_to,
        )
        self.history.append(message)
        self.channel.broadcast(CHAT_MESSAGE, message.to_dict())

    def _handle_delete_message(self, sid, request):
        if sid not in self.registry:
            return

        message = self.history.find(request.message_id)
        if message is None:
            return

        if message.user.id != sid:
            print(f"[DELETE] sid {sid} tried to delete message {message.id} owned by {message.user.id}")
            return

        self.history.remove(message.id)
        print(f"[DELETE] {message.user.name} deleted message {message.id}")
        self.channel.broadcast(MESSAGE_DELETED, message.id)

    def _handle_typing(self, sid, request):
        user = self.registry.get(sid)
        if user is None:
            return
        self.channel.broadcast(
            TYPING_STATUS,
            {"user": user.to_dict(), "isTyping": request.is_typing},
            skip_sid=sid,
        )

    def _handle_disconnect(self, sid, request):
        user = self.registry.leave(sid)
        if user is None:
            return

        print(f"[DISCONNECTION] {user.name} left (sid: {sid}, reason: {request.reason})")
        self.channel.broadcast(SYSTEM_MESSAGE, f"{user.name} has left.")
        self.channel.broadcast(UPDATE_USERS, self._users_payload())
        # Clear any typing indicator the client never stopped
        self.channel.broadcast(
            TYPING_STATUS,
            {"user": user.to_dict(), "isTyping": False},
            skip_sid=sid,
        )
