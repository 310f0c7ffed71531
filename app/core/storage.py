import logging
import uuid
from pathlib import PurePosixPath
from typing import List, Optional
from supabase import Client
from app.core.config import settings
from app.core.errors import CaseStoreError

logger = logging.getLogger(__name__)


class CaseDocumentStorage:
    """
    Files attached to case history, kept in a private Supabase Storage bucket.

    Objects are never public; readers get short-lived signed URLs.
    """

    def __init__(self, client: Client, bucket_name: Optional[str] = None):
        self.client = client
        self.bucket_name = bucket_name or settings.STORAGE_BUCKET

    @property
    def bucket(self):
        return self.client.storage.from_(self.bucket_name)

    def generate_file_key(self, case_id: str, filename: str) -> str:
        """
        Generate a unique file key for storage.
        Format: {case_id}/{uuid}.{ext}
        """
        suffix = PurePosixPath(filename or "").suffix
        return f"{case_id}/{uuid.uuid4()}{suffix}"

    def upload_file(self, file_key: str, content: bytes, content_type: Optional[str] = None) -> str:
        """
        Upload a file without overwriting an existing object.
        Returns the file key.
        """
        file_options = {"upsert": "false"}
        if content_type:
            file_options["content-type"] = content_type
        try:
            self.bucket.upload(path=file_key, file=content, file_options=file_options)
        except Exception as e:
            logger.error(f"Error uploading file to storage: {e}")
            raise CaseStoreError(str(e), operation="upload_file") from e
        logger.info(f"Uploaded {file_key} to bucket {self.bucket_name}")
        return file_key

    def create_signed_url(self, file_key: str, expires_in: Optional[int] = None) -> str:
        """
        Generate a time-limited URL for reading a stored file.
        """
        expires_in = expires_in or settings.SIGNED_URL_EXPIRES_IN
        result = self.bucket.create_signed_url(file_key, expires_in)
        signed_url = None
        if isinstance(result, dict):
            signed_url = result.get("signedURL") or result.get("signedUrl")
        if not signed_url:
            raise CaseStoreError(f"No signed URL returned for {file_key}", operation="create_signed_url")
        return signed_url

    def delete_files(self, file_keys: List[str]) -> bool:
        """
        Delete files from storage.
        Returns True if successful, False otherwise.
        """
        if not file_keys:
            return True
        try:
            self.bucket.remove(file_keys)
            return True
        except Exception as e:
            logger.error(f"Error deleting files from storage: {e}")
            return False
