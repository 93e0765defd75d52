"""
File upload, health and index routes for the chat hub.
"""

from flask import Blueprint, current_app, jsonify, request, send_from_directory


upload_bp = Blueprint('upload', __name__)


@upload_bp.route("/upload", methods=["POST"])
def upload_file():
    """Store a single uploaded file and return the path to reference in chat"""
    uploaded = request.files.get("file")
    if uploaded is None or not uploaded.filename:
        return jsonify({"error": "No file uploaded."}), 400

    file_path = current_app.file_store.save(uploaded)
    print(f"[UPLOAD] Stored '{uploaded.filename}' as {file_path}")
    return jsonify({"filePath": file_path})


@upload_bp.route("/health")
def health():
    """Health check with current presence and history counts"""
    return jsonify({"status": "ok", **current_app.hub.stats()})


@upload_bp.route("/uploads/<path:filename>")
def uploaded_file(filename):
    """Serve a previously uploaded file"""
    return send_from_directory(current_app.file_store.upload_dir, filename)


@upload_bp.route("/")
def index():
    """Chat client page from the static folder"""
    return current_app.send_static_file("index.html")
