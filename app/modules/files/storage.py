"""Blob storage backends for uploaded files.

Supabase Storage is the default; S3 takes over when AWS credentials and a
bucket are configured. Both expose ``upload_file(content, key, content_type)``
returning a URL and ``delete_file(key)`` which raises on failure.
"""
from supabase import Client
from app.config import settings
from app.modules.files.s3_storage import S3Storage
import logging

logger = logging.getLogger(__name__)


class SupabaseStorage:
    def __init__(self, supabase: Client, bucket_name: str = None):
        self.supabase = supabase
        self.bucket_name = bucket_name or settings.storage_bucket

    def upload_file(self, file_content: bytes, key: str, content_type: str = "application/octet-stream") -> str:
        bucket = self.supabase.storage.from_(self.bucket_name)
        bucket.upload(key, file_content, file_options={"content-type": content_type})
        return bucket.get_public_url(key)

    def delete_file(self, key: str) -> None:
        self.supabase.storage.from_(self.bucket_name).remove([key])


def get_blob_storage(supabase: Client):
    """S3 when configured, otherwise the Supabase Storage bucket."""
    if settings.s3_configured:
        try:
            storage = S3Storage()
            logger.info("S3 storage initialized successfully")
            return storage
        except Exception as e:
            logger.warning(f"S3 storage initialization failed ({str(e)}), will use Supabase Storage")
    return SupabaseStorage(supabase)
