"""
Database codec for suki.

This module reads and writes the flat-text `.suki` format. Each tag is a line
ending with a colon, followed by one tab-indented line per file name:

    work:
    	report.docx
    	budget.xlsx
    urgent:
    	report.docx

Loading creates the database file if it does not exist yet, so a missing file
and an empty file both yield an empty Database. Saving always rewrites the
whole file.
"""

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import List, Optional, Union

from ..errors import DatabaseSyntaxError, DatabaseIOError, DatabaseEncodingError
from ..models.config import SukiConfig
from ..models.database import Database, Tag, TAG_SUFFIX, FILE_PREFIX


logger = logging.getLogger(__name__)


def parse(text: str) -> Database:
    """
    Parse database text into a Database.

    Args:
        text: Full contents of a `.suki` file

    Returns:
        Database with tags and files in file order

    Raises:
        DatabaseSyntaxError: On the first line that breaks the grammar
    """
    tags: List[Tag] = []
    positions = {}
    current: Optional[Tag] = None

    for line_number, line in enumerate(_split_lines(text), start=1):
        # File lines belong to the most recent tag line.
        if line.startswith(FILE_PREFIX):
            if current is None:
                raise DatabaseSyntaxError(line_number, "cannot start suki file with filename")
            current.files.append(line[len(FILE_PREFIX):])
            continue

        if not line.endswith(TAG_SUFFIX):
            raise DatabaseSyntaxError(line_number, f"missing '{TAG_SUFFIX}' at end of label descriptor")

        label = line[:-len(TAG_SUFFIX)]
        if not label:
            raise DatabaseSyntaxError(line_number, "empty tag label")
        if label.endswith(TAG_SUFFIX):
            raise DatabaseSyntaxError(line_number, f"tag label cannot end with '{TAG_SUFFIX}'")

        if current is not None:
            _flush(tags, positions, current)
        current = Tag(label=label)

    if current is not None:
        _flush(tags, positions, current)

    return Database(tags=tags)


def _split_lines(text: str) -> List[str]:
    """Split on newlines; a final newline terminates the last line instead of starting a new one."""
    lines = text.split('\n')
    if lines and lines[-1] == '':
        lines.pop()
    return lines


def _flush(tags: List[Tag], positions: dict, tag: Tag) -> None:
    """Add a finished tag, merging it into an earlier tag with the same label."""
    if tag.label in positions:
        logger.debug(f"Merging repeated tag {tag.label!r}")
        tags[positions[tag.label]].files.extend(tag.files)
        return
    positions[tag.label] = len(tags)
    tags.append(tag)


def serialize(db: Database) -> str:
    """
    Serialize a Database to the `.suki` text format.

    Args:
        db: Database to serialize

    Returns:
        Newline-terminated text; empty string for an empty database
    """
    lines = []
    for tag in db.tags:
        lines.append(f"{tag.label}{TAG_SUFFIX}\n")
        for filename in tag.files:
            lines.append(f"{FILE_PREFIX}{filename}\n")
    return "".join(lines)


def load(directory: Union[str, Path], config: Optional[SukiConfig] = None) -> Database:
    """
    Load the database stored in a directory.

    Args:
        directory: Directory holding the database file
        config: Settings to use (defaults if None)

    Returns:
        Parsed Database; empty if the file did not exist or was empty

    Raises:
        DatabaseIOError: If the file cannot be created or read
        DatabaseEncodingError: If the file is not valid text in the configured encoding
        DatabaseSyntaxError: If the file contents are malformed
    """
    config = config or SukiConfig()
    path = config.database_path(directory)

    try:
        # 'a+' creates the file when missing without touching existing content.
        with open(path, 'a+b') as f:
            f.seek(0)
            data = f.read()
    except OSError as e:
        raise DatabaseIOError(f"Cannot read database {path}: {e}", path) from e

    try:
        text = data.decode(config.encoding)
    except UnicodeDecodeError as e:
        raise DatabaseEncodingError(f"Database {path} is not valid {config.encoding}: {e}", path) from e

    db = parse(text)
    logger.debug(f"Loaded {len(db.tags)} tags from {path}")
    return db


def save(db: Database, directory: Union[str, Path], config: Optional[SukiConfig] = None) -> None:
    """
    Write a database to a directory, replacing any previous contents.

    Args:
        db: Database to write
        directory: Directory holding the database file
        config: Settings to use (defaults if None)

    Raises:
        DatabaseIOError: If the file cannot be written
        DatabaseEncodingError: If a label or file name cannot be encoded
    """
    config = config or SukiConfig()
    path = config.database_path(directory)

    try:
        data = serialize(db).encode(config.encoding)
    except UnicodeEncodeError as e:
        raise DatabaseEncodingError(f"Cannot encode database for {path} as {config.encoding}: {e}", path) from e

    try:
        if config.atomic_write:
            _write_atomic(path, data)
        else:
            with open(path, 'wb') as f:
                f.write(data)
    except OSError as e:
        raise DatabaseIOError(f"Cannot write database {path}: {e}", path) from e

    logger.debug(f"Saved {len(db.tags)} tags to {path}")


def _write_atomic(path: Path, data: bytes) -> None:
    """Write data to a temporary file next to path and rename it into place."""
    fd, tmp_name = tempfile.mkstemp(prefix=f"{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        # mkstemp files are private; keep the permissions of the file being replaced.
        if path.exists():
            os.chmod(tmp_name, stat.S_IMODE(path.stat().st_mode))
        os.replace(tmp_name, path)
    except OSError:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
