import os
import re
import time
import logging

logger = logging.getLogger(__name__)


class UploadManager:
    def __init__(self, upload_dir):
        """Initializes the UploadManager.

        :param upload_dir: Directory holding uploaded audio files.
        """
        self.upload_dir = upload_dir
        os.makedirs(self.upload_dir, exist_ok=True)
        logger.info("UploadManager initialized with upload directory: %s", self.upload_dir)

    def sanitize_filename(self, name):
        """
        Sanitizes a string to be used as a filename.
        """
        name = re.sub(r'[\\/:*?"<>|\x00-\x1f]', '_', name)
        name = name.strip()
        name = re.sub(r'_{2,}', '_', name)
        return name

    def _unique_name(self, original_name):
        # Millisecond prefix keeps the original name readable; bump it on collision.
        base = self.sanitize_filename(original_name or '') or 'upload'
        prefix = int(time.time() * 1000)
        while True:
            candidate = f"{prefix}-{base}"
            if not os.path.exists(os.path.join(self.upload_dir, candidate)):
                return candidate
            prefix += 1

    def save(self, upload):
        """Write an uploaded ``FileStorage`` into the upload directory.

        Returns the stored filename (relative to the upload directory).
        """
        os.makedirs(self.upload_dir, exist_ok=True)
        stored_name = self._unique_name(upload.filename)
        upload.save(os.path.join(self.upload_dir, stored_name))
        logger.info("Stored upload %r as %s", upload.filename, stored_name)
        return stored_name

    def path_for(self, stored_name):
        """Absolute path for a stored filename, or None if it would leave the upload directory."""
        if not stored_name:
            return None
        root = os.path.abspath(self.upload_dir)
        full = os.path.abspath(os.path.join(root, stored_name))
        if os.path.commonpath([root, full]) != root or full == root:
            logger.warning("Rejected stored path outside upload directory: %s", stored_name)
            return None
        return full

    def remove(self, stored_name):
        """Best-effort removal; failures are logged and reported as False."""
        full = self.path_for(stored_name)
        if full is None:
            return False
        try:
            os.remove(full)
            logger.info("Removed uploaded file %s", full)
            return True
        except OSError as e:
            logger.warning("Could not remove uploaded file %s: %s", full, e)
            return False

    def is_writable(self):
        return os.path.isdir(self.upload_dir) and os.access(self.upload_dir, os.W_OK)
