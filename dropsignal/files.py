"""
The list of files picked for an upload, before and while it is shared.
"""

from dataclasses import dataclass
import mimetypes
import os
from typing import TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class UploadedFile:
    name: str
    type: str = ""
    size: int = 0
    entry_full_path: str | None = None

    @classmethod
    def from_path(cls, path: str, root: str | None = None) -> "UploadedFile":
        """
        Describe a local file.

        ``root`` keeps the path relative to a dropped directory as the
        display name, the way directory drops are listed.
        """
        mime_type, _ = mimetypes.guess_type(path)
        entry_full_path = None
        if root is not None:
            entry_full_path = os.path.relpath(path, root).replace(os.sep, "/")
        return cls(
            name=os.path.basename(path),
            type=mime_type or "",
            size=os.path.getsize(path),
            entry_full_path=entry_full_path,
        )


def file_name(file: UploadedFile) -> str:
    return file.entry_full_path or file.name


def remove_file(files: list[T], index: int) -> list[T]:
    """Return a copy of ``files`` without the entry at ``index``."""
    if not 0 <= index < len(files):
        raise IndexError(f"No file at index {index} in a list of {len(files)}")
    return [f for i, f in enumerate(files) if i != index]


def describe_files(files: list[UploadedFile]) -> list[dict[str, str]]:
    return [{"fileName": file_name(f), "type": f.type} for f in files]
