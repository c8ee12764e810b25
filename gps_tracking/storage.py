import logging
import os
import time
import uuid

from fastapi import UploadFile

logger = logging.getLogger(__name__)


def generate_filename(original_name: str) -> str:
    """Upload timestamp in milliseconds, a short random tag, and the original extension."""
    extension = os.path.splitext(original_name)[1]
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{extension}"


class DocumentStore:
    """Driver identity documents kept as plain files in one directory."""

    def __init__(self, upload_dir: str):
        self.upload_dir = upload_dir

    def path_for(self, filename: str) -> str:
        return os.path.join(self.upload_dir, filename)

    async def save(self, upload: UploadFile | None) -> str | None:
        if upload is None or not upload.filename:
            return None

        os.makedirs(self.upload_dir, exist_ok=True)
        filename = generate_filename(upload.filename)

        content = await upload.read()
        with open(self.path_for(filename), "wb") as f:
            f.write(content)

        logger.info("Stored document %s (%d bytes)", filename, len(content))
        return filename

    def discard(self, *filenames: str | None) -> None:
        for filename in filenames:
            if not filename:
                continue
            try:
                os.remove(self.path_for(filename))
            except FileNotFoundError:
                pass
            except OSError:
                logger.exception("Could not remove orphaned document %s", filename)
