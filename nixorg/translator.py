"""Translation of note content tokens into Org markup."""

from __future__ import annotations

import html
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import PurePath

from .attachments import AttachmentResolver
from .constants import (
    EMPHASIS_MARKERS,
    HEADING_MARKER,
    HORIZONTAL_RULE,
    INLINE_CODE_MARKER,
    LIST_INDENT,
    QUOTE_BEGIN,
    QUOTE_END,
    SRC_BEGIN,
    SRC_END,
    TODO_CHECKED,
    TODO_UNCHECKED,
    UNORDERED_BULLET,
)
from .models import ListKind, ListMarker, TagKind, Token, TokenType, TranslationState


@dataclass(frozen=True)
class _Inputs:
    """Read-only collaborators shared by every handler of one run."""

    attachments: AttachmentResolver
    media_dir_name: str
    warn: Callable[[str], None] | None


_Handler = Callable[[TranslationState, Token, _Inputs], None]


def _ignore(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    return None


def _emit_media(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    file_name = inputs.attachments.resolve(token.attr("hash"))
    state.emit(f"\n[[./{inputs.media_dir_name}/{file_name}]]")


def _emit_todo(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    checked = token.attr("checked")
    if checked == "true":
        state.emit(TODO_CHECKED)
    elif checked == "false":
        state.emit(TODO_UNCHECKED)


def _emit_line_break(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    state.emit("\n")


def _emit_rule(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    state.emit(HORIZONTAL_RULE)


def _open_anchor(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    # Links are not rendered inside heading labels
    if state.heading_depth == 0:
        state.emit(f"[[{token.attr('href')}][")


def _close_anchor(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    if state.heading_depth == 0:
        state.emit("]]")


def _open_block(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    state.emit("\n")


def _toggle_emphasis(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    # Same marker on open and close; mismatched nesting is not corrected.
    state.emit(EMPHASIS_MARKERS[token.kind])


def _open_heading(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    state.emit(f"\n{HEADING_MARKER * (token.heading_level + 1)} ")
    state.heading_depth += 1


def _close_heading(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    state.heading_depth = max(state.heading_depth - 1, 0)


def _open_table(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    state.table_depth += 1


def _close_table(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    state.table_depth = max(state.table_depth - 1, 0)


def _open_cell(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    state.emit("|")


def _close_row(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    state.emit("|\n")


def _open_ordered_list(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    state.list_stack.append(ListMarker(ListKind.ORDERED))


def _open_unordered_list(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    state.list_stack.append(ListMarker(ListKind.UNORDERED))


def _close_list(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    if state.list_stack:
        state.list_stack.pop()


def _open_list_item(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    state.emit("\n" + LIST_INDENT * (len(state.list_stack) + 1))
    if not state.list_stack:
        return

    marker = state.list_stack[-1]
    if marker.kind is ListKind.UNORDERED:
        state.emit(UNORDERED_BULLET)
    else:
        state.emit(f"{marker.next_index}.")
        marker.next_index += 1


def _toggle_inline_code(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    if not state.in_verbatim:
        state.emit(INLINE_CODE_MARKER)


def _open_preformatted(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    state.emit(SRC_BEGIN)
    state.in_verbatim = True


def _close_preformatted(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    state.emit(SRC_END)
    state.in_verbatim = False


def _open_quote(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    state.emit(QUOTE_BEGIN)


def _close_quote(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    state.emit(QUOTE_END)


_SELF_CLOSING_HANDLERS: dict[TagKind, _Handler] = {
    TagKind.MEDIA: _emit_media,
    TagKind.TODO: _emit_todo,
    TagKind.LINE_BREAK: _emit_line_break,
    TagKind.RULE: _emit_rule,
}

_START_HANDLERS: dict[TagKind, _Handler] = {
    TagKind.ANCHOR: _open_anchor,
    TagKind.BLOCK: _open_block,
    TagKind.UNDERLINE: _toggle_emphasis,
    TagKind.ITALIC: _toggle_emphasis,
    TagKind.BOLD: _toggle_emphasis,
    TagKind.STRIKE: _toggle_emphasis,
    TagKind.HEADING: _open_heading,
    TagKind.IGNORED: _ignore,
    # A bare <br> and an opening <tr> are part of the ignore set
    TagKind.LINE_BREAK: _ignore,
    TagKind.TABLE_ROW: _ignore,
    TagKind.RULE: _emit_rule,
    TagKind.MEDIA: _emit_media,
    TagKind.TABLE: _open_table,
    TagKind.TABLE_CELL: _open_cell,
    TagKind.ORDERED_LIST: _open_ordered_list,
    TagKind.UNORDERED_LIST: _open_unordered_list,
    TagKind.LIST_ITEM: _open_list_item,
    TagKind.INLINE_CODE: _toggle_inline_code,
    TagKind.PREFORMATTED: _open_preformatted,
    TagKind.BLOCKQUOTE: _open_quote,
}

_END_HANDLERS: dict[TagKind, _Handler] = {
    TagKind.UNDERLINE: _toggle_emphasis,
    TagKind.ITALIC: _toggle_emphasis,
    TagKind.BOLD: _toggle_emphasis,
    TagKind.STRIKE: _toggle_emphasis,
    TagKind.ANCHOR: _close_anchor,
    TagKind.HEADING: _close_heading,
    TagKind.TABLE: _close_table,
    TagKind.TABLE_ROW: _close_row,
    TagKind.ORDERED_LIST: _close_list,
    TagKind.UNORDERED_LIST: _close_list,
    TagKind.INLINE_CODE: _toggle_inline_code,
    TagKind.PREFORMATTED: _close_preformatted,
    TagKind.BLOCKQUOTE: _close_quote,
}


def _apply_token(state: TranslationState, token: Token, inputs: _Inputs) -> None:
    """Apply one token to the translation state.

    Args:
        state: Accumulator of the current run.
        token: Token to apply; end-of-stream tokens are ignored.
        inputs: Attachment lookup, media directory name, and warning callback.
    """
    if token.type is TokenType.TEXT:
        state.emit(html.unescape(token.name))
    elif token.type is TokenType.SELF_CLOSING_TAG:
        _SELF_CLOSING_HANDLERS.get(token.kind, _ignore)(state, token, inputs)
    elif token.type is TokenType.END_TAG:
        _END_HANDLERS.get(token.kind, _ignore)(state, token, inputs)
    elif token.type is TokenType.START_TAG:
        handler = _START_HANDLERS.get(token.kind)
        if handler is not None:
            handler(state, token, inputs)
        elif inputs.warn is not None:
            inputs.warn(f"skip token: {token.name}")


def translate(
    tokens: Iterable[Token],
    attachments: AttachmentResolver,
    media_dir: PurePath | str,
    warn: Callable[[str], None] | None = None,
) -> str:
    """Render a note's content tokens as Org markup.

    Runs a single left-to-right pass and stops at the first end-of-stream
    token. Never raises for malformed or unknown markup; such input simply
    produces less output.

    Args:
        tokens: Token sequence produced by `nixorg.tokenizer.tokenize`.
        attachments: Hash to file-name lookup for the note's attachments.
        media_dir: Directory holding the note's attachments. Only its last
            component is used, so links stay relative to the note file.
        warn: Optional callback receiving a notice for each unrecognized
            start tag.

    Returns:
        str: Org markup for the note body.

    Examples:
        translate(tokenize("<h1>Title</h1>"), AttachmentResolver(), "notes")  # "\\n** Title"
    """
    inputs = _Inputs(
        attachments=attachments,
        media_dir_name=PurePath(media_dir).name,
        warn=warn,
    )
    state = TranslationState()

    for token in tokens:
        if token.type is TokenType.END_OF_STREAM:
            break
        _apply_token(state, token, inputs)

    return state.text()
