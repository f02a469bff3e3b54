"""Constants used across the nixorg package."""

from __future__ import annotations

from .config import NixorgConfig
from .models import TagKind

DEFAULT_CONFIG = NixorgConfig()

DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size

# Tag vocabulary, resolved once by the tokenizer
TAG_KINDS: dict[str, TagKind] = {
    "en-media": TagKind.MEDIA,
    "en-todo": TagKind.TODO,
    "br": TagKind.LINE_BREAK,
    "hr": TagKind.RULE,
    "a": TagKind.ANCHOR,
    "p": TagKind.BLOCK,
    "div": TagKind.BLOCK,
    "u": TagKind.UNDERLINE,
    "i": TagKind.ITALIC,
    "b": TagKind.BOLD,
    "strong": TagKind.BOLD,
    "em": TagKind.BOLD,
    "del": TagKind.STRIKE,
    "h1": TagKind.HEADING,
    "h2": TagKind.HEADING,
    "h3": TagKind.HEADING,
    "h4": TagKind.HEADING,
    "h5": TagKind.HEADING,
    "h6": TagKind.HEADING,
    "table": TagKind.TABLE,
    "tr": TagKind.TABLE_ROW,
    "td": TagKind.TABLE_CELL,
    "ol": TagKind.ORDERED_LIST,
    "ul": TagKind.UNORDERED_LIST,
    "li": TagKind.LIST_ITEM,
    "code": TagKind.INLINE_CODE,
    "tt": TagKind.INLINE_CODE,
    "kbd": TagKind.INLINE_CODE,
    "pre": TagKind.PREFORMATTED,
    "blockquote": TagKind.BLOCKQUOTE,
}

# Tags that are known but produce no output of their own
IGNORED_TAGS = frozenset(
    {
        "en-note",
        "span",
        "tbody",
        "abbr",
        "th",
        "thead",
        "ins",
        "img",
        "sup",
        "sub",
        "small",
        "dl",
        "dd",
        "dt",
        "font",
        "colgroup",
        "cite",
        "address",
        "s",
        "map",
        "area",
        "center",
        "q",
    }
)

# Org markup
EMPHASIS_MARKERS: dict[TagKind, str] = {
    TagKind.UNDERLINE: "_",
    TagKind.ITALIC: "/",
    TagKind.BOLD: "*",
    TagKind.STRIKE: "+",
}
INLINE_CODE_MARKER = "~"
HEADING_MARKER = "*"
LIST_INDENT = "  "
UNORDERED_BULLET = "- "
HORIZONTAL_RULE = "\n------------------------------------\n"
TODO_CHECKED = "\n- [X] "
TODO_UNCHECKED = "\n- [ ] "
SRC_BEGIN = "\n#+BEGIN_SRC\n"
SRC_END = "\n#+END_SRC\n"
QUOTE_BEGIN = "\n#+BEGIN_QUOTE\n"
QUOTE_END = "\n#+END_QUOTE\n"

# Characters removed from note titles before they become file names
TITLE_STRIP_CHARS = "-'(),:|?./\""

# Undocumented deep link; the service corrects the `s` parameter itself.
EVERNOTE_URL_TEMPLATE = "https://evernote.com/Home.action#n={guid}&s=s1&ses=4&sh=2"

PAYLOAD_ENCODINGS = ("hex", "base64")
