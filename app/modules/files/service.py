from supabase import Client
from app.config import settings
from app.core.exceptions import FetchFailure
from app.modules.files.file_types import get_file_type
from app.modules.files.query import FileQuery
from app.modules.files.schemas import (
    FileResponse, FileListResponse, FileUpload, CategoryUsage, UsageSummary
)
from app.modules.files.storage import get_blob_storage
from app.modules.users.schemas import UserResponse
from typing import List, Optional
from fastapi import HTTPException
from datetime import datetime, timezone
import mimetypes
import logging
import uuid

logger = logging.getLogger(__name__)

# rows per request when a whole filtered set is read
_FETCH_CHUNK = 1000

# files.type -> usage summary bucket
_USAGE_CATEGORIES = {
    "document": "documents",
    "image": "images",
    "video": "media",
    "audio": "media",
    "other": "others",
}


class FileService:
    def __init__(self, supabase: Client, storage=None):
        self.supabase = supabase
        self.storage = storage or get_blob_storage(supabase)

    def _table(self):
        return self.supabase.table(settings.files_table)

    def _filtered(self, columns: str, owner_id: str, query: FileQuery, count: Optional[str] = None):
        builder = self._table().select(columns, count=count)\
            .eq("owner_id", owner_id)\
            .in_("type", query.types)
        if query.search_text:
            builder = builder.ilike("name", f"%{query.search_text}%")
        return builder

    @staticmethod
    def _fetch_all(select) -> List[dict]:
        """Every row of a select, read in chunks.

        PostgREST truncates unranged selects at its max-rows setting, so a
        single request cannot be trusted to return the whole set. ``select``
        builds a fresh query for each chunk.
        """
        rows = []
        while True:
            result = select().order("id").limit(_FETCH_CHUNK).offset(len(rows)).execute()
            chunk = result.data or []
            if not chunk:
                return rows
            rows.extend(chunk)

    def list_files(self, query: FileQuery, owner_id: str) -> FileListResponse:
        """One page of the owner's files plus count and total size of every matching file."""
        try:
            page = self._filtered("*", owner_id, query, count="exact")\
                .order(query.sort_field, desc=query.sort_desc)\
                .limit(query.limit)\
                .offset(query.offset)\
                .execute()
            sizes = self._fetch_all(lambda: self._filtered("id, size", owner_id, query))
        except Exception as e:
            logger.error(f"Failed to list files for {owner_id}: {e}")
            raise FetchFailure()

        documents = [FileResponse(**f) for f in page.data or []]
        total = page.count if page.count is not None else len(documents)
        total_size = sum(row.get("size") or 0 for row in sizes)
        return FileListResponse(documents=documents, total=total, total_size=total_size)

    def get_recent_files(self, owner_id: str, limit: int = 10) -> List[FileResponse]:
        try:
            result = self._table().select("*")\
                .eq("owner_id", owner_id)\
                .order("created_at", desc=True)\
                .limit(limit)\
                .execute()
        except Exception as e:
            logger.error(f"Failed to fetch recent files for {owner_id}: {e}")
            raise FetchFailure()
        return [FileResponse(**f) for f in result.data or []]

    def get_usage_summary(self, owner_id: str) -> UsageSummary:
        """Bytes used per category, with the latest change in each."""
        try:
            rows = self._fetch_all(
                lambda: self._table().select("id, type, size, created_at, updated_at").eq("owner_id", owner_id)
            )
        except Exception as e:
            logger.error(f"Failed to fetch usage for {owner_id}: {e}")
            raise FetchFailure()

        usage = {name: CategoryUsage() for name in set(_USAGE_CATEGORIES.values())}
        used = 0
        for row in rows:
            size = row.get("size") or 0
            used += size
            bucket = usage[_USAGE_CATEGORIES.get(row.get("type"), "others")]
            bucket.size += size
            changed = row.get("updated_at") or row.get("created_at")
            if changed:
                changed = _parse_timestamp(changed)
                if bucket.latest is None or changed > bucket.latest:
                    bucket.latest = changed
        return UsageSummary(**usage, used=used, all=settings.storage_quota_bytes)

    def get_file(self, owner_id: str, file_id: str) -> FileResponse:
        try:
            result = self._table().select("*")\
                .eq("id", file_id)\
                .eq("owner_id", owner_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not result.data:
            raise HTTPException(status_code=404, detail="File not found")
        return FileResponse(**result.data[0])

    def upload_file(self, owner: UserResponse, upload: FileUpload) -> FileResponse:
        """Store the bytes, then create the row. The stored object is removed if the row insert fails."""
        size = len(upload.content)
        if size == 0:
            raise HTTPException(status_code=400, detail="File is empty")
        if size > settings.max_upload_bytes:
            raise HTTPException(status_code=400, detail="File exceeds the maximum upload size")

        file_type, extension = get_file_type(upload.filename)
        content_type = upload.content_type or mimetypes.guess_type(upload.filename)[0] or "application/octet-stream"
        key = f"{owner.account_id}/{uuid.uuid4().hex}-{upload.filename}"

        try:
            url = self.storage.upload_file(upload.content, key, content_type=content_type)
            logger.info(f"Uploaded {upload.filename} to storage: {key}")
        except Exception as e:
            logger.error(f"Storage upload failed: {str(e)}")
            raise HTTPException(status_code=500, detail=f"Failed to upload to storage: {str(e)}")

        try:
            result = self._table().insert({
                "name": upload.filename,
                "url": url,
                "type": file_type,
                "extension": extension,
                "size": size,
                "owner_id": owner.id,
                "account_id": owner.account_id,
                "bucket_file_id": key,
            }).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create file record")
            return FileResponse(**result.data[0])
        except Exception as e:
            logger.error(f"Failed to create file record, removing {key}: {e}")
            try:
                self.storage.delete_file(key)
            except Exception as cleanup_error:
                logger.warning(f"Failed to remove orphaned upload {key}: {cleanup_error}")
            if isinstance(e, HTTPException):
                raise
            raise HTTPException(status_code=500, detail=f"Failed to create file record: {str(e)}")

    def rename_file(self, owner_id: str, file_id: str, name: str) -> FileResponse:
        """Rename a file, keeping its extension."""
        current = self.get_file(owner_id, file_id)
        name = name.strip()
        if not name:
            raise HTTPException(status_code=400, detail="File name is required")
        if current.extension and not name.lower().endswith(f".{current.extension}"):
            name = f"{name}.{current.extension}"
        try:
            result = self._table()\
                .update({"name": name, "updated_at": datetime.now(timezone.utc).isoformat()})\
                .eq("id", file_id)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not result.data:
            raise HTTPException(status_code=404, detail="File not found")
        return FileResponse(**result.data[0])

    def delete_file(self, owner_id: str, file_id: str) -> None:
        """Delete the row, then the stored object.

        If the object cannot be removed the row is restored, so a listed file
        always has its bytes behind it.
        """
        current = self.get_file(owner_id, file_id)
        try:
            result = self._table().delete().eq("id", file_id).execute()
        except Exception as e:
            logger.error(f"Failed to delete file record {file_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to delete file record: {str(e)}")
        if not result.data:
            raise HTTPException(status_code=404, detail="File not found")

        try:
            self.storage.delete_file(current.bucket_file_id)
            logger.info(f"Deleted {current.bucket_file_id} from storage")
        except Exception as e:
            logger.error(f"Failed to delete {current.bucket_file_id} from storage, restoring record: {e}")
            try:
                self._table().insert(current.model_dump(mode="json")).execute()
            except Exception as restore_error:
                logger.error(
                    f"Failed to restore file record {file_id}; "
                    f"stored object {current.bucket_file_id} is orphaned: {restore_error}"
                )
            raise HTTPException(status_code=500, detail=f"Failed to delete from storage: {str(e)}")


def _parse_timestamp(value) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
