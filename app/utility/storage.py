import logging
import mimetypes
import os
import uuid
from pathlib import Path
from typing import Optional
from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool
from supabase import create_client, Client

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


async def stage_upload(file: Optional[UploadFile], temp_dir: str) -> Optional[str]:
    """
    Save an uploaded file into the temp directory.

    Args:
        file: UploadFile from the multipart form, may be missing
        temp_dir: Directory the file is written to

    Returns:
        str: Local path of the staged file, or None if no file was sent
    """
    if file is None or not file.filename:
        return None

    os.makedirs(temp_dir, exist_ok=True)
    local_path = os.path.join(temp_dir, f"{uuid.uuid4()}{Path(file.filename).suffix}")

    try:
        with open(local_path, "wb") as buffer:
            while chunk := await file.read(CHUNK_SIZE):
                buffer.write(chunk)
    except BaseException:
        # client went away or the read failed midway
        remove_local_file(local_path)
        raise

    return local_path


def remove_local_file(local_path: str):
    try:
        os.remove(local_path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove temp file {local_path}: {str(e)}")


class MediaStorage:
    """Profile images on Supabase Storage"""

    def __init__(self, project_url: str, service_key: str, bucket: str = "images"):
        self.project_url = project_url
        self.service_key = service_key
        self.bucket = bucket
        self._client: Optional[Client] = None

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = create_client(self.project_url, self.service_key)
        return self._client

    def _upload(self, local_path: str) -> str:
        filename = f"{uuid.uuid4()}{Path(local_path).suffix}"
        content_type = mimetypes.guess_type(local_path)[0] or "application/octet-stream"

        with open(local_path, "rb") as f:
            self.client.storage.from_(self.bucket).upload(
                path=filename,
                file=f.read(),
                file_options={
                    "content-type": content_type,
                    "upsert": "false"  # Don't overwrite existing files
                }
            )

        return self.client.storage.from_(self.bucket).get_public_url(filename)

    async def upload_file(self, local_path: Optional[str]) -> Optional[str]:
        """
        Upload a staged local file and return its public URL.

        The local file is removed afterwards whether the upload succeeded or not.

        Returns:
            str: Public URL, or None if there was no file or the upload failed
        """
        if not local_path:
            return None

        try:
            url = await run_in_threadpool(self._upload, local_path)
            logger.info(f"File uploaded successfully: {url}")
            return url
        except Exception as e:
            logger.error(f"Failed to upload to Supabase Storage: {str(e)}")
            return None
        finally:
            remove_local_file(local_path)

    def _remove(self, filename: str):
        self.client.storage.from_(self.bucket).remove([filename])

    async def delete_file(self, file_url: Optional[str]) -> bool:
        if not file_url:
            return False

        filename = file_url.split("?")[0].split("/")[-1] if file_url.startswith("http") else file_url

        try:
            await run_in_threadpool(self._remove, filename)
            return True
        except Exception as e:
            logger.warning(f"Error deleting file from Supabase Storage: {str(e)}")
            return False
