"""File classification by extension, and the category -> type mapping used by listings."""
import os
from typing import Dict, List, Optional, Tuple

DOCUMENT_EXTENSIONS = {
    "pdf", "doc", "docx", "txt", "xls", "xlsx", "csv", "rtf", "ods", "ppt",
    "odp", "md", "html", "htm", "epub", "pages", "fig", "psd", "ai", "indd",
    "xd", "sketch", "afdesign", "afphoto",
}
IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "bmp", "svg", "webp"}
VIDEO_EXTENSIONS = {"mp4", "avi", "mov", "mkv", "webm"}
AUDIO_EXTENSIONS = {"mp3", "wav", "ogg", "flac"}

# URL path segment -> file types stored in files.type
CATEGORY_TYPES: Dict[str, List[str]] = {
    "documents": ["document"],
    "images": ["image"],
    "media": ["video", "audio"],
    "others": ["other"],
}


def get_file_type(filename: str) -> Tuple[str, str]:
    """Return (type, extension) for a file name. Unknown extensions are 'other'."""
    extension = os.path.splitext(filename)[1].lstrip(".").lower()
    if not extension:
        return "other", ""
    if extension in DOCUMENT_EXTENSIONS:
        return "document", extension
    if extension in IMAGE_EXTENSIONS:
        return "image", extension
    if extension in VIDEO_EXTENSIONS:
        return "video", extension
    if extension in AUDIO_EXTENSIONS:
        return "audio", extension
    return "other", extension


def get_category_types(category: str) -> Optional[List[str]]:
    """File types for a category path segment, or None when the category is unknown."""
    types = CATEGORY_TYPES.get(category)
    return list(types) if types is not None else None


def format_bytes(size: int, decimals: int = 2) -> str:
    if size <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB", "TB"]
    value = float(size)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    if index == 0:
        return f"{int(value)} Bytes"
    return f"{round(value, decimals):g} {units[index]}"
