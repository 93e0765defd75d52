import io
import json
import os

import pytest

from app import create_app
from backend.utils.file_store import FileStore, sanitize_filename


@pytest.fixture
def app(tmp_path):
    return create_app({
        "TESTING": True,
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
    })


@pytest.fixture
def client(app):
    """Create a test client"""
    with app.test_client() as client:
        yield client


class TestHealthEndpoint:
    """Test the health check endpoint"""

    def test_health_returns_200(self, client):
        """Health endpoint should return 200 OK with counts"""
        response = client.get('/health')
        assert response.status_code == 200
        data = json.loads(response.data)
        assert data == {"status": "ok", "users": 0, "messages": 0}


class TestUploadEndpoint:
    """Test the file intake endpoint"""

    def test_upload_without_file_returns_400(self, client):
        response = client.post('/upload', data={}, content_type='multipart/form-data')
        assert response.status_code == 400
        assert json.loads(response.data) == {"error": "No file uploaded."}

    def test_upload_with_empty_filename_returns_400(self, client):
        response = client.post(
            '/upload',
            data={'file': (io.BytesIO(b''), '')},
            content_type='multipart/form-data',
        )
        assert response.status_code == 400

    def test_upload_stores_sanitized_file(self, app, client):
        """Uploaded files land on disk under a timestamped, sanitized name"""
        response = client.post(
            '/upload',
            data={'file': (io.BytesIO(b'hello'), 'my report (final)!.txt')},
            content_type='multipart/form-data',
        )
        assert response.status_code == 200
        file_path = json.loads(response.data)['filePath']
        assert file_path.startswith('/uploads/')
        assert file_path.endswith('-myreportfinal.txt')

        stored_name = file_path.rsplit('/', 1)[-1]
        prefix = stored_name.split('-', 1)[0]
        assert prefix.isdigit()
        with open(os.path.join(app.file_store.upload_dir, stored_name), 'rb') as f:
            assert f.read() == b'hello'

    def test_uploaded_file_is_served(self, client):
        response = client.post(
            '/upload',
            data={'file': (io.BytesIO(b'png-bytes'), 'cat.png')},
            content_type='multipart/form-data',
        )
        file_path = json.loads(response.data)['filePath']
        download = client.get(file_path)
        assert download.status_code == 200
        assert download.data == b'png-bytes'
        download.close()

    def test_upload_too_large(self, tmp_path):
        app = create_app({
            "TESTING": True,
            "UPLOAD_FOLDER": str(tmp_path / "uploads"),
            "MAX_CONTENT_LENGTH": 10,
        })
        with app.test_client() as client:
            response = client.post(
                '/upload',
                data={'file': (io.BytesIO(b'x' * 1024), 'big.bin')},
                content_type='multipart/form-data',
            )
        assert response.status_code == 413


class TestFileStore:
    """Test filename handling in the file store"""

    @pytest.mark.parametrize("original, expected", [
        ("photo.jpg", "photo.jpg"),
        ("../../etc/passwd", "....etcpasswd"),
        ("résumé v2.pdf", "rsumv2.pdf"),
        ("a_b-c.d", "a_b-c.d"),
        ("日本語", "upload"),
        ("", "upload"),
    ])
    def test_sanitize_filename(self, original, expected):
        assert sanitize_filename(original) == expected

    def test_stored_name_uses_millisecond_prefix(self, tmp_path):
        store = FileStore(str(tmp_path), clock=lambda: 1700000000.5)
        assert store.stored_name("a b.txt") == "1700000000500-ab.txt"

    def test_same_name_in_same_millisecond_does_not_collide(self, tmp_path):
        """A frozen clock still gives every upload its own stored name"""
        store = FileStore(str(tmp_path), clock=lambda: 1700000000.5)
        names = [store.stored_name("photo.jpg") for _ in range(3)]
        assert names == [
            "1700000000500-photo.jpg",
            "1700000000501-photo.jpg",
            "1700000000502-photo.jpg",
        ]

    def test_same_name_uploads_both_kept(self, tmp_path):
        app = create_app({"TESTING": True, "UPLOAD_FOLDER": str(tmp_path / "uploads")})
        app.file_store._clock = lambda: 1700000000.5
        with app.test_client() as client:
            paths = [
                json.loads(client.post(
                    '/upload',
                    data={'file': (io.BytesIO(body), 'same.txt')},
                    content_type='multipart/form-data',
                ).data)['filePath']
                for body in (b'first', b'second')
            ]
        assert paths[0] != paths[1]
        stored = sorted(os.listdir(app.file_store.upload_dir))
        assert len(stored) == 2

    def test_store_creates_directory(self, tmp_path):
        target = tmp_path / "nested" / "uploads"
        FileStore(str(target))
        assert target.is_dir()


class TestConfig:
    """Test environment configuration"""

    def test_history_limit_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CHAT_HISTORY_LIMIT", "7")
        app = create_app({"TESTING": True, "UPLOAD_FOLDER": str(tmp_path)})
        assert app.hub.history.capacity == 7

    def test_port_default_and_override(self, monkeypatch):
        from backend.utils.config import get_port
        monkeypatch.delenv("PORT", raising=False)
        assert get_port() == 3000
        monkeypatch.setenv("PORT", "8123")
        assert get_port() == 8123

    def test_history_limit_capped_at_200(self, monkeypatch, tmp_path):
        """An oversized limit from the environment is clamped"""
        monkeypatch.setenv("CHAT_HISTORY_LIMIT", "500")
        app = create_app({"TESTING": True, "UPLOAD_FOLDER": str(tmp_path)})
        assert app.config["CHAT_HISTORY_LIMIT"] == 200

        client = app.socketio.test_client(app)
        client.emit("join", "Alice")
        for i in range(300):
            client.emit("chat message", {"type": "text", "content": f"msg {i}"})
        assert len(app.hub.history) == 200
        assert app.hub.history.snapshot()[0].content == "msg 100"
        client.disconnect()


class TestIndexPage:
    """Test the chat client page"""

    def test_index_served_from_static_folder(self, app, tmp_path):
        static_dir = tmp_path / "static"
        static_dir.mkdir()
        (static_dir / "index.html").write_text("<h1>Chat</h1>")
        app.static_folder = str(static_dir)
        with app.test_client() as client:
            response = client.get('/')
            assert response.status_code == 200
            assert b'<h1>Chat</h1>' in response.data
            response.close()

    def test_index_missing_returns_404(self, app, tmp_path):
        app.static_folder = str(tmp_path / "empty")
        with app.test_client() as client:
            assert client.get('/').status_code == 404
