"""Data models for nixorg."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path


class TokenType(Enum):
    """Kinds of tokens produced by the tokenizer adapter.

    Attributes:
        START_TAG: Opening tag such as ``<p>``.
        END_TAG: Closing tag such as ``</p>``.
        SELF_CLOSING_TAG: Tag written with a trailing slash such as ``<br/>``.
        TEXT: Raw character data, entity references left undecoded.
        END_OF_STREAM: Terminates every token sequence.
    """

    START_TAG = auto()
    END_TAG = auto()
    SELF_CLOSING_TAG = auto()
    TEXT = auto()
    END_OF_STREAM = auto()


class TagKind(Enum):
    """Closed set of tag kinds the translator knows how to handle.

    Tag names are resolved to a kind once, by the tokenizer, so translation
    never compares raw tag names. ``UNRECOGNIZED`` covers every tag outside
    the known vocabulary; ``NONE`` is used for text and end-of-stream tokens.
    """

    NONE = auto()
    MEDIA = auto()
    TODO = auto()
    LINE_BREAK = auto()
    RULE = auto()
    ANCHOR = auto()
    BLOCK = auto()
    UNDERLINE = auto()
    ITALIC = auto()
    BOLD = auto()
    STRIKE = auto()
    HEADING = auto()
    IGNORED = auto()
    TABLE = auto()
    TABLE_ROW = auto()
    TABLE_CELL = auto()
    ORDERED_LIST = auto()
    UNORDERED_LIST = auto()
    LIST_ITEM = auto()
    INLINE_CODE = auto()
    PREFORMATTED = auto()
    BLOCKQUOTE = auto()
    UNRECOGNIZED = auto()


@dataclass(frozen=True)
class Token:
    """A single token of note content.

    Attributes:
        type: Token type.
        kind: Resolved tag kind, ``TagKind.NONE`` for text and end of stream.
        name: Lowercased tag name, or the raw text for text tokens.
        attrs: Attribute pairs in document order; duplicates are kept.
    """

    type: TokenType
    kind: TagKind = TagKind.NONE
    name: str = ""
    attrs: tuple[tuple[str, str], ...] = ()

    def attr(self, key: str) -> str:
        """Return the first value for `key`, or an empty string when absent."""
        for name, value in self.attrs:
            if name == key:
                return value
        return ""

    @property
    def heading_level(self) -> int:
        """Heading level (1-6) for heading tags, 0 for anything else."""
        if self.kind is not TagKind.HEADING:
            return 0
        return int(self.name[1:])


class ListKind(Enum):
    """Kinds of open lists tracked while translating."""

    UNORDERED = auto()
    ORDERED = auto()


@dataclass
class ListMarker:
    """One entry of the open-list stack.

    Attributes:
        kind: Whether the list is ordered or unordered.
        next_index: Number given to the next item of an ordered list.
    """

    kind: ListKind
    next_index: int = 1


@dataclass
class TranslationState:
    """Mutable accumulator owned by a single translation run.

    Attributes:
        output: Emitted text chunks, joined once translation finishes.
        heading_depth: Non-zero while inside a heading label. Headings do not
            nest; this is a saturating counter used as a flag.
        table_depth: Number of open tables. Tracked but never rendered.
        list_stack: One marker per currently open list, innermost last.
        in_verbatim: True inside a preformatted block.
    """

    output: list[str] = field(default_factory=list)
    heading_depth: int = 0
    table_depth: int = 0
    list_stack: list[ListMarker] = field(default_factory=list)
    in_verbatim: bool = False

    def emit(self, text: str) -> None:
        self.output.append(text)

    def text(self) -> str:
        return "".join(self.output)


@dataclass
class Resource:
    """An attachment embedded in a note.

    Attributes:
        mime: MIME type declared in the archive.
        data: Encoded payload text.
        encoding: Payload encoding, ``"hex"`` unless the archive says otherwise.
        hash: Content hash referenced by media tags in the note content.
        file_name: Original file name, empty when the archive has none.
    """

    mime: str = ""
    data: str = ""
    encoding: str = "hex"
    hash: str = ""
    file_name: str = ""

    @property
    def display_name(self) -> str:
        """File name used on disk and in links, falling back to the hash.

        Only the last path component is kept, so a name read from the archive
        can never point outside the note's attachment directory. Empty when
        neither the file name nor the hash yields a usable name.
        """
        return _base_name(self.file_name) or _base_name(self.hash)


def _base_name(name: str) -> str:
    base = name.replace("\\", "/").rsplit("/", 1)[-1].strip()
    if base in {".", ".."}:
        return ""
    return base


@dataclass
class NoteAttributes:
    """Optional metadata attached to a note."""

    author: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    source: str = ""
    source_url: str = ""


@dataclass
class Note:
    """A single note parsed from the archive.

    Attributes:
        guid: Note identifier.
        title: Note title.
        content: Raw HTML-like content.
        created: Creation time as epoch milliseconds, kept as text.
        tags: Tag names in archive order.
        attributes: Author, location, and source metadata.
        resources: Attachments in archive order.
    """

    guid: str = ""
    title: str = ""
    content: str = ""
    created: str = ""
    tags: list[str] = field(default_factory=list)
    attributes: NoteAttributes = field(default_factory=NoteAttributes)
    resources: list[Resource] = field(default_factory=list)


@dataclass
class ConversionReport:
    """Summary of a finished archive conversion.

    Attributes:
        output_dir: Directory holding the converted notes.
        notes: Number of note files written.
        attachments: Number of attachment files written.
        written: Paths of the note files, in archive order.
    """

    output_dir: Path
    notes: int = 0
    attachments: int = 0
    written: list[Path] = field(default_factory=list)
