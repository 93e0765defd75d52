"""
File intake for the chat hub.
Stores uploaded files on disk and hands back the public path clients send in chat.
"""

import os
import re
import threading
import time


UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9\-._]")


def sanitize_filename(filename):
    """Keep only letters, digits, '-', '.' and '_'"""
    return UNSAFE_FILENAME_CHARS.sub("", filename or "") or "upload"


class FileStore:
    """Saves uploads under a timestamp-prefixed, sanitized name"""

    def __init__(self, upload_dir, url_prefix="/uploads", clock=time.time):
        self.upload_dir = upload_dir
        self.url_prefix = url_prefix.rstrip("/")
        self._clock = clock
        self._last_prefix = 0
        self._lock = threading.Lock()
        os.makedirs(self.upload_dir, exist_ok=True)

    def stored_name(self, original_name):
        # Millisecond prefix, bumped so two uploads never share one
        with self._lock:
            self._last_prefix = max(int(self._clock() * 1000), self._last_prefix + 1)
            prefix = self._last_prefix
        return f"{prefix}-{sanitize_filename(original_name)}"

    def save(self, file_storage):
        """Write a werkzeug FileStorage to disk and return its public path"""
        name = self.stored_name(file_storage.filename)
        file_storage.save(os.path.join(self.upload_dir, name))
        return f"{self.url_prefix}/{name}"
