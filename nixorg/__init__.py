"""
nixorg: convert exported note archives to Org files.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    nixorg --input notes.nnex

Library Usage:
    from nixorg import AttachmentResolver, tokenize, translate

    resolver = AttachmentResolver.from_resources(note.resources)
    body = translate(tokenize(note.content), resolver, "attachments-dir")
"""

from .archive import parse_archive, parse_archive_bytes
from .attachments import AttachmentResolver, decode_payload
from .config import ConfigError, NixorgConfig
from .converter import convert_archive, convert_note, render_note
from .exceptions import (
    ArchiveError,
    AttachmentError,
    InvalidTimestampError,
    NixorgError,
    OutputError,
)
from .models import ConversionReport, Note, NoteAttributes, Resource, TagKind, Token, TokenType
from .properties import format_properties
from .slugify import sanitize_title
from .tokenizer import tokenize
from .translator import translate

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "tokenize",
    "translate",
    "convert_archive",
    "convert_note",
    "render_note",
    "format_properties",
    "sanitize_title",
    "parse_archive",
    "parse_archive_bytes",
    "decode_payload",
    # Data models
    "AttachmentResolver",
    "ConversionReport",
    "NixorgConfig",
    "Note",
    "NoteAttributes",
    "Resource",
    "TagKind",
    "Token",
    "TokenType",
    # Exceptions
    "ArchiveError",
    "AttachmentError",
    "ConfigError",
    "InvalidTimestampError",
    "NixorgError",
    "OutputError",
    # Version
    "__version__",
]
