"""Upload payloads for multipart/form-data requests."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class UploadType(str, Enum):
    """Kind of file being uploaded, with its multipart metadata."""

    IMAGE = "image"
    VIDEO = "video"

    @property
    def mime_type(self) -> str:
        if self is UploadType.VIDEO:
            return "video/mp4"
        return "image/jpeg"

    @property
    def placeholder_name(self) -> str:
        if self is UploadType.VIDEO:
            return "placeholder.mov"
        return "placeholder.jpeg"

    @property
    def field_name(self) -> str:
        return "file"


@dataclass(frozen=True)
class UploadInfo:
    """
    Raw bytes to upload together with their content category.

    When ``data`` is None or empty no multipart body is built and the
    request falls back to a plain JSON or form request.
    """

    type: UploadType
    data: Optional[bytes] = None

    @property
    def has_data(self) -> bool:
        return bool(self.data)
