"""Tokenizer adapter turning note markup into a flat token list."""

from __future__ import annotations

from html.parser import HTMLParser

from .constants import IGNORED_TAGS, TAG_KINDS
from .models import TagKind, Token, TokenType


def classify_tag(name: str) -> TagKind:
    """Resolve a lowercased tag name to its `TagKind`.

    Args:
        name: Tag name as reported by the HTML parser.

    Returns:
        TagKind: Known kind, ``TagKind.IGNORED`` for the explicit ignore set,
            or ``TagKind.UNRECOGNIZED`` for anything else.

    Examples:
        classify_tag("strong")  # TagKind.BOLD
        classify_tag("span")  # TagKind.IGNORED
        classify_tag("marquee")  # TagKind.UNRECOGNIZED
    """
    kind = TAG_KINDS.get(name)
    if kind is not None:
        return kind
    if name in IGNORED_TAGS:
        return TagKind.IGNORED
    return TagKind.UNRECOGNIZED


class _TokenCollector(HTMLParser):
    """Collect parser callbacks into `Token` objects.

    Character data is kept undecoded; entity and character references are
    written back in their source form and merged with the surrounding text.
    The parser also reports a bare ``&`` followed by letters (``AT&T``) as an
    entity reference, so the terminating ``;`` is only restored when the
    source has one.
    """

    def __init__(self, markup: str) -> None:
        super().__init__(convert_charrefs=False)
        self.tokens: list[Token] = []
        self._pending_text: list[str] = []
        self._markup = markup
        self._line_starts = [0, *(index + 1 for index, char in enumerate(markup) if char == "\n")]

    def handle_starttag(self, tag, attrs):
        self._push_tag(TokenType.START_TAG, tag, attrs)

    def handle_startendtag(self, tag, attrs):
        self._push_tag(TokenType.SELF_CLOSING_TAG, tag, attrs)

    def handle_endtag(self, tag):
        self._push_tag(TokenType.END_TAG, tag, [])

    def handle_data(self, data):
        self._pending_text.append(data)

    def handle_entityref(self, name):
        self._pending_text.append(self._source_reference(f"&{name}"))

    def handle_charref(self, name):
        self._pending_text.append(self._source_reference(f"&#{name}"))

    def _source_reference(self, reference: str) -> str:
        # getpos() still points at the "&" while a reference is reported
        lineno, offset = self.getpos()
        end = self._line_starts[lineno - 1] + offset + len(reference)
        if self._markup.startswith(";", end):
            return f"{reference};"
        return reference

    def flush_text(self) -> None:
        if not self._pending_text:
            return
        text = "".join(self._pending_text)
        self._pending_text.clear()
        if text:
            self.tokens.append(Token(TokenType.TEXT, name=text))

    def _push_tag(self, token_type: TokenType, tag: str, attrs) -> None:
        self.flush_text()
        name = tag.lower()
        pairs = tuple((key.lower(), value if value is not None else "") for key, value in attrs)
        self.tokens.append(Token(token_type, classify_tag(name), name, pairs))


def tokenize(markup: str | bytes) -> list[Token]:
    """Split note markup into an ordered list of tokens.

    Comments, doctype declarations, and processing instructions produce no
    tokens. The result always ends with a single ``END_OF_STREAM`` token; a
    parser failure truncates the list at the point of failure.

    Args:
        markup: Note content as text or UTF-8 bytes.

    Returns:
        list[Token]: Tokens in document order.

    Examples:
        tokenize("<p>Hello &amp; bye</p>")
    """
    if isinstance(markup, bytes):
        markup = markup.decode("utf-8", errors="replace")

    collector = _TokenCollector(markup)
    try:
        collector.feed(markup)
        collector.close()
    except (AssertionError, ValueError):
        # Unrecoverable markup ends the stream; keep what was parsed so far.
        pass
    collector.flush_text()

    return [*collector.tokens, Token(TokenType.END_OF_STREAM)]
