"""
Tag index operations for suki.

These functions mutate or query an in-memory Database. They never touch the
disk; callers load the database first and save it afterwards if it changed.
"""

import logging
from typing import Dict, List, Optional, Sequence

from ..errors import InvalidArgumentError
from ..models.database import Database, Tag, check_filename, check_label


logger = logging.getLogger(__name__)


def _require_filename(filename: str) -> None:
    try:
        check_filename(filename)
    except ValueError as e:
        raise InvalidArgumentError(str(e)) from e


def _require_labels(tags: Sequence[str]) -> None:
    for label in tags:
        try:
            check_label(label)
        except ValueError as e:
            raise InvalidArgumentError(str(e)) from e


def add_file_to_tags(db: Database, filename: str, tags: Sequence[str], dedupe: bool = False) -> Database:
    """
    Add a file name under each of the given tags.

    Tags that do not exist yet are created at the end of the database. The
    file name is appended even if the tag already lists it, unless `dedupe`
    is set.

    Args:
        db: Database to modify in place
        filename: File name to add
        tags: Tag labels, processed in order
        dedupe: Skip tags that already list the file name

    Returns:
        The same Database instance

    Raises:
        InvalidArgumentError: If the file name or a label is invalid; the database is left unchanged
    """
    _require_filename(filename)
    _require_labels(tags)

    for label in tags:
        index = db.find_tag(label)
        if index is None:
            logger.debug(f"Creating tag {label!r}")
            db.tags.append(Tag(label=label, files=[filename]))
            continue

        tag = db.tags[index]
        if dedupe and tag.has_file(filename):
            continue
        tag.files.append(filename)

    return db


def remove_file_from_tags(db: Database, filename: str, tags: Sequence[str]) -> Database:
    """
    Remove every occurrence of a file name from each of the given tags.

    Labels that are not in the database are skipped. Tags left without files
    are kept.

    Args:
        db: Database to modify in place
        filename: File name to remove
        tags: Tag labels to remove it from

    Returns:
        The same Database instance

    Raises:
        InvalidArgumentError: If the file name is empty or contains a newline
    """
    _require_filename(filename)

    for label in tags:
        tag = db.get_tag(label)
        if tag is None:
            logger.debug(f"Tag {label!r} not found, nothing to remove")
            continue
        tag.files[:] = [f for f in tag.files if f != filename]

    return db


def intersect_search(db: Database, tags: Sequence[str]) -> List[str]:
    """
    Find the file names listed under every one of the given tags.

    The working set starts as the first tag's files and is narrowed by each
    following tag. A tag missing from the database matches nothing, so the
    search stops there. An empty tag list also matches nothing.

    Args:
        db: Database to query
        tags: Tag labels that must all be present

    Returns:
        Matching file names, each once, in the order they appear under the first tag
    """
    working_set: Optional[Dict[str, None]] = None

    for label in tags:
        tag = db.get_tag(label)
        if tag is None:
            logger.debug(f"Tag {label!r} not found, no file can match")
            return []

        if working_set is None:
            working_set = dict.fromkeys(tag.files)
        else:
            members = set(tag.files)
            working_set = {f: None for f in working_set if f in members}

    if working_set is None:
        return []
    return list(working_set)
