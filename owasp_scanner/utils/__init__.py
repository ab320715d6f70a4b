"""Utility helpers for the scanner."""

from .code import FILE_TYPES, file_type_for
from .fileio import read_config_file, read_json_file, read_text_file, read_yaml_file, write_text_file

__all__ = [
    "FILE_TYPES",
    "file_type_for",
    "read_config_file",
    "read_json_file",
    "read_text_file",
    "read_yaml_file",
    "write_text_file",
]
