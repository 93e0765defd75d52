"""
Socket.IO event handlers for the chat hub.
Parses client events and hands them to the broadcast hub.
"""

from flask import request
from flask_socketio import SocketIO

from backend.models.message_history import MessageHistory
from .channel import SocketIOChannel
from .hub import BroadcastHub
from .requests import (
    DisconnectRequest,
    TypingRequest,
    parse_chat_message,
    parse_delete_message,
    parse_join,
)


# SocketIO instance will be imported from app factory
socketio = None


def init_socketio(app):
    """Initialize Socket.IO and the broadcast hub for the Flask app"""
    global socketio
    socket_logging = app.config["SOCKETIO_LOGGER"]
    socketio = SocketIO(
        app,
        cors_allowed_origins=app.config["CORS_ALLOWED_ORIGINS"],
        async_mode=app.config["SOCKETIO_ASYNC_MODE"],
        logger=socket_logging,
        engineio_logger=socket_logging,
    )

    hub = BroadcastHub(
        SocketIOChannel(socketio),
        history=MessageHistory(app.config["CHAT_HISTORY_LIMIT"]),
    )

    # Register event handlers
    register_handlers(socketio, hub)

    app.socketio = socketio
    app.hub = hub
    return socketio


def register_handlers(socketio, hub):
    """Register all Socket.IO event handlers"""

    @socketio.on("connect")
    def handle_connect(auth=None):
        print(f"[CONNECTION] A user connected: {request.sid}")

    @socketio.on("disconnect")
    def handle_disconnect(reason=None):
        hub.dispatch(request.sid, DisconnectRequest(reason=reason))

    @socketio.on_error_default
    def default_error_handler(e):
        """Default error handler for all events"""
        print(f"[SOCKET ERROR] Error occurred: {e}")
        print(f"[SOCKET ERROR] Event: {request.event}")
        return False

    @socketio.on("join")
    def handle_join(data=None):
        hub.dispatch(request.sid, parse_join(data))

    @socketio.on("chat message")
    def handle_chat_message(data=None):
        chat_request = parse_chat_message(data)
        if chat_request is None:
            print(f"[CHAT] Dropped malformed message from sid {request.sid}")
            return
        hub.dispatch(request.sid, chat_request)

    @socketio.on("delete message")
    def handle_delete_message(data=None):
        delete_request = parse_delete_message(data)
        if delete_request is None:
            return
        hub.dispatch(request.sid, delete_request)

    @socketio.on("typing")
    def handle_typing(data=None):
        hub.dispatch(request.sid, TypingRequest(is_typing=True))

    @socketio.on("stop-typing")
    def handle_stop_typing(data=None):
        hub.dispatch(request.sid, TypingRequest(is_typing=False))
