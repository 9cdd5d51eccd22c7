"""
Media API endpoints.
Streams uploaded photos and videos from local storage with HTTP Range support.
Reads require the event token when one is configured.
"""

import logging
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response, StreamingResponse

from app.core.auth import require_event_token
from app.core.config import settings
from app.utils.byte_range import RangeNotSatisfiable, parse_range_header
from app.utils.content_type import media_type_for
from app.utils.streaming import iter_file_range

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["media"],
    dependencies=[Depends(require_event_token)],
)


@dataclass(frozen=True)
class ResolvedFile:
    """A servable file inside the storage root."""
    absolute_path: Path
    size_bytes: int
    mime_type: str


def split_media_path(file_path: str) -> List[str]:
    """Split a URL path tail into its non-empty segments."""
    return [segment for segment in file_path.split("/") if segment]


def resolve_media_file(base_path: str, path_segments: List[str]) -> ResolvedFile:
    """
    Validate a storage-relative path and resolve it to a servable file.

    Checks run in order and the first failure wins: presence, textual
    traversal markers, containment of the canonical path in the canonical
    storage root, existence as a regular file, then the MIME allow-list.

    Args:
        base_path: Storage root directory
        path_segments: Path components below the storage root

    Returns:
        ResolvedFile for the requested media

    Raises:
        HTTPException: 400 for empty or unsafe paths, 404 if the file is
            missing or not a regular file, 415 for disallowed extensions
    """
    if not path_segments:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="File path is required"
        )

    joined_path = "/".join(path_segments)
    if ".." in joined_path or "\\" in joined_path or "\x00" in joined_path:
        logger.warning(f"[MEDIA] Rejected traversal attempt: {joined_path!r}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid path"
        )

    # Canonicalize both sides so symlinks cannot lead outside the root
    resolved_base = Path(base_path).resolve()
    resolved_file = Path(base_path).joinpath(*path_segments).resolve()
    if not resolved_file.is_relative_to(resolved_base):
        logger.warning(f"[MEDIA] Rejected path outside storage root: {joined_path!r}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid path"
        )

    try:
        file_stat = resolved_file.stat()
    except OSError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="File not found"
        )

    if not stat.S_ISREG(file_stat.st_mode):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Not a file"
        )

    mime_type = media_type_for(resolved_file.name)
    if mime_type is None:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Unsupported file type"
        )

    return ResolvedFile(
        absolute_path=resolved_file,
        size_bytes=file_stat.st_size,
        mime_type=mime_type,
    )


def media_headers(content_length: int) -> dict:
    """Headers common to full and partial media responses."""
    return {
        "Cache-Control": f"public, max-age={settings.MEDIA_CACHE_MAX_AGE}, immutable",
        "Content-Length": str(content_length),
        "Accept-Ranges": "bytes",
        "X-Content-Type-Options": "nosniff",
    }


@router.get("/media/{file_path:path}")
@router.get("/api/media/{file_path:path}", include_in_schema=False)
async def get_media(
    file_path: str,
    range_header: Optional[str] = Header(None, alias="range"),
):
    """
    Serve a stored photo or video.

    Without a Range header the whole file is returned with 200. With
    "Range: bytes=<start>-<end>" the requested slice is returned with 206;
    malformed or unsatisfiable ranges get 416 and "Content-Range: bytes */<size>".

    Example:
        curl "http://server/media/alice/1700000000-ab12.mp4" \\
          -H "X-Event-Token: TOKEN" \\
          -H "Range: bytes=0-1023"

    Args:
        file_path: Storage-relative path (e.g., "alice/videos/abc.mp4")
        range_header: Optional HTTP Range header

    Returns:
        Streamed file body
    """
    resolved = await run_in_threadpool(
        resolve_media_file,
        settings.LOCAL_STORAGE_PATH,
        split_media_path(file_path),
    )
    size = resolved.size_bytes

    if range_header is None:
        return StreamingResponse(
            iter_file_range(resolved.absolute_path, 0, size, settings.STREAM_CHUNK_SIZE),
            status_code=status.HTTP_200_OK,
            media_type=resolved.mime_type,
            headers=media_headers(size),
        )

    try:
        byte_range = parse_range_header(range_header, size)
    except RangeNotSatisfiable as e:
        logger.info(f"[MEDIA] Unsatisfiable range for {file_path}: {e}")
        return Response(
            status_code=status.HTTP_416_RANGE_NOT_SATISFIABLE,
            headers={"Content-Range": e.content_range},
        )

    headers = media_headers(byte_range.length)
    headers["Content-Range"] = byte_range.content_range(size)

    return StreamingResponse(
        iter_file_range(
            resolved.absolute_path,
            byte_range.start,
            byte_range.length,
            settings.STREAM_CHUNK_SIZE,
        ),
        status_code=status.HTTP_206_PARTIAL_CONTENT,
        media_type=resolved.mime_type,
        headers=headers,
    )
