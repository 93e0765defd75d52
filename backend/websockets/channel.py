"""
Connection channel backed by Flask-SocketIO.
"""


class SocketIOChannel:
    """Delivers hub events to one, all, or all-but-one connected clients"""

    def __init__(self, socketio, namespace="/"):
        self.socketio = socketio
        self.namespace = namespace

    def send_to(self, sid, event, payload):
        self.socketio.emit(event, payload, to=sid, namespace=self.namespace)

    def broadcast(self, event, payload, skip_sid=None):
        self.socketio.emit(event, payload, skip_sid=skip_sid, namespace=self.namespace)
