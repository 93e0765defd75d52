"""
Configuration module for the chat hub.
Reads settings from the environment (and an optional .env file) into app.config.
"""

import os
from dotenv import load_dotenv

from backend.models.message_history import DEFAULT_HISTORY_LIMIT

# Load environment variables from .env file
load_dotenv()


DEFAULT_PORT = 3000
DEFAULT_UPLOAD_FOLDER = os.path.join("public", "uploads")
DEFAULT_MAX_CONTENT_LENGTH = 16 * 1024 * 1024


def env_flag(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_port():
    """Port to listen on, from PORT"""
    return int(os.getenv("PORT", DEFAULT_PORT))


def get_host():
    return os.getenv("HOST", "0.0.0.0")


def init_app(app, test_config=None):
    """Apply environment configuration to the Flask app; test_config wins"""

    app.config["SECRET_KEY"] = os.getenv("SECRET_KEY", "your-secret-key-change-in-production")
    app.config["UPLOAD_FOLDER"] = os.getenv("UPLOAD_FOLDER", DEFAULT_UPLOAD_FOLDER)
    app.config["MAX_CONTENT_LENGTH"] = int(os.getenv("MAX_CONTENT_LENGTH", DEFAULT_MAX_CONTENT_LENGTH))
    # History may be shortened but never grown past 200 messages
    app.config["CHAT_HISTORY_LIMIT"] = min(int(os.getenv("CHAT_HISTORY_LIMIT", DEFAULT_HISTORY_LIMIT)), DEFAULT_HISTORY_LIMIT)

    # Socket.IO settings
    origins = os.getenv("CORS_ALLOWED_ORIGINS", "*")
    app.config["CORS_ALLOWED_ORIGINS"] = origins if origins == "*" else [o.strip() for o in origins.split(",")]
    app.config["SOCKETIO_ASYNC_MODE"] = os.getenv("SOCKETIO_ASYNC_MODE", "threading")
    app.config["SOCKETIO_LOGGER"] = env_flag("SOCKETIO_LOGGER")

    if test_config:
        app.config.update(test_config)

    if app.config["SECRET_KEY"] == "your-secret-key-change-in-production" and not app.config.get("TESTING"):
        print("[CONFIG] SECRET_KEY not set, using development default")

    print(f"[CONFIG] History limit {app.config['CHAT_HISTORY_LIMIT']}, uploads in {app.config['UPLOAD_FOLDER']}")
