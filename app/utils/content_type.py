"""
Content-Type allow-list for served media.
Maps file extensions to the MIME types the gallery is willing to serve.
"""

from pathlib import PurePath
from types import MappingProxyType
from typing import Mapping, Optional


# Extension (lowercase, no dot) -> MIME type.
# SVG is excluded: it can carry <script> and would enable stored XSS.
# AVIF and MKV are excluded because uploads never accept them either.
MEDIA_TYPES: Mapping[str, str] = MappingProxyType({
    # Images
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",

    # Video
    "mp4": "video/mp4",
    "mov": "video/quicktime",
    "avi": "video/x-msvideo",
    "webm": "video/webm",
})


def get_extension(filename: str) -> str:
    """
    Return the lowercase extension of a filename without the dot.

    Examples:
        >>> get_extension("photo.JPG")
        'jpg'

        >>> get_extension("archive.tar.gz")
        'gz'

        >>> get_extension("README")
        ''
    """
    return PurePath(filename).suffix[1:].lower()


def media_type_for(filename: str) -> Optional[str]:
    """
    Look up the MIME type to serve for a filename.

    Args:
        filename: Filename or path (e.g., "alice/1700000000-ab12.jpg")

    Returns:
        MIME type string, or None if the extension is not allowed
    """
    return MEDIA_TYPES.get(get_extension(filename))
