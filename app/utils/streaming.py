"""
Streaming download utilities.
Sync-to-async bridging for reading file regions into a response body.
"""

import logging
from pathlib import Path
from typing import AsyncIterator, BinaryIO

from fastapi.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 256 * 1024  # 256KB read buffer


async def iter_file_range(
    path: Path,
    start: int,
    length: int,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> AsyncIterator[bytes]:
    """
    Yield `length` bytes of a file starting at offset `start`.

    Blocking reads run in the threadpool, one chunk at a time, so memory use
    is bounded by chunk_size regardless of file size. The file is closed in
    all cases: normal exhaustion, read errors, and cancellation when the
    client disconnects mid-stream.

    Args:
        path: File to read
        start: Byte offset of the first byte to send
        length: Number of bytes to send
        chunk_size: Maximum bytes per read

    Yields:
        File chunks

    Raises:
        IOError: If the file ends before `length` bytes were read
    """
    file_obj: BinaryIO = await run_in_threadpool(_open_at, path, start)
    remaining = length
    try:
        while remaining > 0:
            chunk = await run_in_threadpool(file_obj.read, min(chunk_size, remaining))
            if not chunk:
                # File shrank underneath us; never complete a short body
                raise IOError(
                    f"Unexpected end of file: {path} ({length - remaining}/{length} bytes sent)"
                )
            remaining -= len(chunk)
            yield chunk
    except Exception as e:
        logger.error(f"[STREAMING] Read failed: {path} :: {e}")
        raise
    finally:
        file_obj.close()
        if remaining > 0:
            logger.debug(f"[STREAMING] Stream closed early: {path} ({remaining} bytes unsent)")


def _open_at(path: Path, offset: int) -> BinaryIO:
    file_obj = open(path, "rb")
    try:
        file_obj.seek(offset)
    except OSError:
        file_obj.close()
        raise
    return file_obj
