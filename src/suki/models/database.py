"""
Database data models for suki.

This module defines the in-memory structures read from and written to a
`.suki` file: a Tag is a label with an ordered list of file names, and a
Database is an ordered list of Tags with unique labels.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator


TAG_SUFFIX = ':'
FILE_PREFIX = '\t'


def check_label(label: str) -> str:
    """
    Validate a tag label against the on-disk grammar.
    
    Args:
        label: Candidate tag label
        
    Returns:
        The label, unchanged (whitespace is significant)
        
    Raises:
        ValueError: If the label cannot be written as a tag line
    """
    if not label:
        raise ValueError("Tag label cannot be empty")
    if label.startswith(FILE_PREFIX):
        raise ValueError(f"Tag label cannot start with a tab: {label!r}")
    if label.endswith(TAG_SUFFIX):
        raise ValueError(f"Tag label cannot end with '{TAG_SUFFIX}': {label!r}")
    if '\n' in label:
        raise ValueError(f"Tag label cannot contain a newline: {label!r}")
    return label


def check_file_line(filename: str) -> str:
    """Validate a file name that must fit on a single file line."""
    if '\n' in filename:
        raise ValueError(f"File name cannot contain a newline: {filename!r}")
    return filename


def check_filename(filename: str) -> str:
    """Validate a file name that is about to be stored under a tag."""
    if not filename:
        raise ValueError("File name cannot be empty")
    return check_file_line(filename)


class Tag(BaseModel):
    """
    A label grouping zero or more file names.
    
    File names keep insertion order and are never sorted. The format does not
    require them to be unique within one tag.
    
    Attributes:
        label: Tag name as written before the trailing colon
        files: Ordered list of file names carrying this tag
    """
    
    label: str = Field(..., description="Tag name")
    files: List[str] = Field(default_factory=list, description="File names under this tag")
    
    @field_validator('label')
    @classmethod
    def validate_label(cls, v: str) -> str:
        """Reject labels that would not survive a save/load cycle."""
        return check_label(v)
    
    @field_validator('files')
    @classmethod
    def validate_files(cls, v: List[str]) -> List[str]:
        """File names may be empty on disk but never span lines."""
        for filename in v:
            check_file_line(filename)
        return v
    
    def has_file(self, filename: str) -> bool:
        """Check if the file name is listed under this tag."""
        return filename in self.files
    
    def __str__(self) -> str:
        return f"{self.label} ({len(self.files)} files)"


class Database(BaseModel):
    """
    The full collection of tags stored in one `.suki` file.
    
    Label uniqueness is checked when the model is built. Appending to `tags`
    directly bypasses that check; use add_file_to_tags, which looks labels
    up with find_tag before creating a tag.
    
    Attributes:
        tags: Ordered list of tags; labels are unique
    """
    
    tags: List[Tag] = Field(default_factory=list, description="Tags in file order")
    
    @model_validator(mode='after')
    def validate_unique_labels(self):
        """Ensure no two tags share a label."""
        seen = set()
        for tag in self.tags:
            if tag.label in seen:
                raise ValueError(f"Duplicate tag label: {tag.label!r}")
            seen.add(tag.label)
        return self
    
    def find_tag(self, label: str) -> Optional[int]:
        """
        Find the position of a tag by its label.
        
        Args:
            label: Exact label to look for (case-sensitive)
            
        Returns:
            Index into `tags`, or None if no tag has that label
        """
        for index, tag in enumerate(self.tags):
            if tag.label == label:
                return index
        return None
    
    def get_tag(self, label: str) -> Optional[Tag]:
        """Get the tag with the given label, if present."""
        index = self.find_tag(label)
        if index is None:
            return None
        return self.tags[index]
    
    def labels(self) -> List[str]:
        """Get all tag labels in file order."""
        return [tag.label for tag in self.tags]
    
    def files(self) -> List[str]:
        """Get every distinct file name across all tags, in first-seen order."""
        return list(dict.fromkeys(f for tag in self.tags for f in tag.files))
    
    def is_empty(self) -> bool:
        """Check if the database holds no tags."""
        return not self.tags
    
    def to_dict(self) -> Dict[str, List[str]]:
        """Convert to a label -> file list mapping, preserving tag order."""
        return {tag.label: list(tag.files) for tag in self.tags}
    
    @classmethod
    def from_dict(cls, data: Dict[str, List[str]]) -> 'Database':
        """Create a Database from a label -> file list mapping."""
        return cls(tags=[Tag(label=label, files=list(files)) for label, files in data.items()])
    
    def __str__(self) -> str:
        return f"Database: {len(self.tags)} tags, {len(self.files())} files"
