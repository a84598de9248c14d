"""Portable file-system adapters.

Exports
-------
- File: Portable handle on a single path.
- WriteFlag: Flags accepted by `File.set_content`.
- FileInputStream: Line-oriented binary reader over a `File`.
- FileExtension: Common file extensions.
"""

from .extensions import FileExtension
from .file import File, WriteFlag, decode_os_file_name, encode_os_file_name, normalize_path
from .input_stream import FileInputStream

__all__ = [
    "File",
    "FileExtension",
    "FileInputStream",
    "WriteFlag",
    "decode_os_file_name",
    "encode_os_file_name",
    "normalize_path",
]
