"""
Chat hub application entry point.
Builds the Flask app, the upload routes and the Socket.IO broadcast hub.
"""

import os
from flask import Flask

from backend.routes.upload import upload_bp
from backend.utils.config import get_host, get_port, init_app
from backend.utils.file_store import FileStore
from backend.websockets.handlers import init_socketio


def create_app(test_config=None):
    """Application factory"""
    app = Flask(__name__, static_folder="public", static_url_path="")
    init_app(app, test_config)

    upload_dir = os.path.join(app.root_path, app.config["UPLOAD_FOLDER"])
    app.file_store = FileStore(upload_dir)

    app.register_blueprint(upload_bp)
    init_socketio(app)
    return app


if __name__ == "__main__":
    app = create_app()
    port = get_port()
    print(f"Server running on http://localhost:{port}")
    app.socketio.run(app, host=get_host(), port=port, allow_unsafe_werkzeug=True)
