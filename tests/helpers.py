"""Builders shared by the test modules."""

from __future__ import annotations

import textwrap
from pathlib import Path

from nixorg.models import Token, TokenType
from nixorg.tokenizer import classify_tag

SAMPLE_CONTENT = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    '<!DOCTYPE en-note SYSTEM "http://xml.evernote.com/pub/enml2.dtd">'
    "<en-note><h1>Groceries</h1><ul><li>Milk</li></ul>"
    '<en-media hash="deadbeef" type="image/png"/></en-note>'
)

SAMPLE_ARCHIVE = f"""
<?xml version="1.0" encoding="UTF-8"?>
<nixnote-export version="2">
<Note>
  <Guid>abc-123</Guid>
  <Title>Shopping List</Title>
  <Content><![CDATA[{SAMPLE_CONTENT}]]></Content>
  <Created>1577880000000</Created>
  <Tag>food</Tag>
  <Tag>weekly</Tag>
  <Attributes>
    <Author>Sam</Author>
    <Latitude>48.5</Latitude>
    <Longitude>2.25</Longitude>
    <Source>mobile</Source>
    <SourceUrl>https://example.com</SourceUrl>
  </Attributes>
  <NoteResource>
    <Mime>image/png</Mime>
    <Data encoding="hex"><Body>48656c6c6f</Body><BodyHash>deadbeef</BodyHash></Data>
    <ResourceAttributes><FileName>photo.png</FileName></ResourceAttributes>
  </NoteResource>
</Note>
<Note>
  <Guid>def-456</Guid>
  <Title>Plain (draft)</Title>
  <Content><![CDATA[<en-note><p>Just &amp; text</p></en-note>]]></Content>
</Note>
</nixnote-export>
"""


def write_archive(directory: Path, content: str = SAMPLE_ARCHIVE, name: str = "notes.nnex") -> Path:
    path = directory / name
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


def start(name: str, **attrs: str) -> Token:
    return Token(TokenType.START_TAG, classify_tag(name), name, tuple(attrs.items()))


def end(name: str) -> Token:
    return Token(TokenType.END_TAG, classify_tag(name), name)


def self_closing(name: str, **attrs: str) -> Token:
    return Token(TokenType.SELF_CLOSING_TAG, classify_tag(name), name, tuple(attrs.items()))


def text(value: str) -> Token:
    return Token(TokenType.TEXT, name=value)


def eos() -> Token:
    return Token(TokenType.END_OF_STREAM)
