"""File system access for cue procedures.

Procedures talk to the disk only through a FileSystem so tests (and hosts
that proxy file access) can substitute their own implementation. The helper
functions below convert every failure into False/None: no I/O exception ever
reaches a procedure's result.
"""

import json
import logging
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class FileSystem(Protocol):
    """Minimal async file system interface used by the procedures."""

    async def exists(self, path: Path) -> bool:
        """Whether a file or directory exists at path."""
        ...

    async def read(self, path: Path) -> str:
        """Read a UTF-8 text file. Raises OSError on failure."""
        ...

    async def write(self, path: Path, content: str) -> int:
        """Write a UTF-8 text file, returning characters written. Raises OSError on failure."""
        ...

    async def mkdir(self, path: Path, recursive: bool = True) -> bool:
        """Create a directory, returning whether it was newly created. Raises OSError on failure."""
        ...


class LocalFileSystem:
    """FileSystem backed by the local disk via pathlib."""

    async def exists(self, path: Path) -> bool:
        return path.exists()

    async def read(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    async def write(self, path: Path, content: str) -> int:
        return path.write_text(content, encoding="utf-8")

    async def mkdir(self, path: Path, recursive: bool = True) -> bool:
        if path.is_dir():
            return False
        path.mkdir(parents=recursive, exist_ok=True)
        return True


# =============================================================================
# Failure-absorbing helpers
# =============================================================================


async def file_exists(path: Path, fs: FileSystem) -> bool:
    try:
        return await fs.exists(path)
    except OSError as e:
        logger.debug("exists(%s) failed: %s", path, e)
        return False


async def read_file(path: Path, fs: FileSystem) -> str | None:
    try:
        return await fs.read(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("read(%s) failed: %s", path, e)
        return None


async def write_file(path: Path, content: str, fs: FileSystem) -> bool:
    try:
        await fs.write(path, content)
    except OSError as e:
        logger.warning("Could not write %s: %s", path, e)
        return False
    logger.debug("Wrote %s (%d chars)", path, len(content))
    return True


async def make_dir(path: Path, fs: FileSystem) -> bool:
    try:
        await fs.mkdir(path, recursive=True)
    except OSError as e:
        logger.warning("Could not create directory %s: %s", path, e)
        return False
    return True


async def read_json(path: Path, fs: FileSystem) -> Any | None:
    """Read and parse a JSON file. Missing, empty and malformed files all yield None."""
    content = await read_file(path, fs)
    if not content:
        return None
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        logger.debug("Ignoring malformed JSON in %s: %s", path, e)
        return None


def dump_json(data: Any) -> str:
    """Serialize the way every generated JSON file is written: 2-space indent, trailing newline."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


async def write_json(path: Path, data: Any, fs: FileSystem) -> bool:
    return await write_file(path, dump_json(data), fs)
