"""Attachment lookup and payload decoding."""

from __future__ import annotations

import base64
import binascii
from collections.abc import Iterable, Iterator

from .constants import PAYLOAD_ENCODINGS
from .exceptions import AttachmentError
from .models import Resource


class AttachmentResolver:
    """Map content hashes to the file names attachments are written under.

    One resolver is built per note and handed to the translator, so hashes
    from one note never resolve inside another.

    Examples:
        resolver = AttachmentResolver.from_resources(note.resources)
        resolver.resolve("abc")  # "photo.png", or "" when unknown
    """

    def __init__(self, mapping: dict[str, str] | None = None):
        self._names: dict[str, str] = dict(mapping or {})

    @classmethod
    def from_resources(cls, resources: Iterable[Resource]) -> AttachmentResolver:
        """Build a resolver from a note's resources.

        Resources without a file name fall back to their hash. A later
        resource with the same hash replaces the earlier entry.
        """
        resolver = cls()
        for resource in resources:
            resolver.register(resource.hash, resource.display_name)
        return resolver

    def register(self, content_hash: str, file_name: str) -> None:
        self._names[content_hash] = file_name

    def resolve(self, content_hash: str) -> str:
        return self._names.get(content_hash, "")

    def __contains__(self, content_hash: object) -> bool:
        return content_hash in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._names!r})"


def decode_payload(resource: Resource) -> bytes:
    """Decode the payload of an attachment.

    Args:
        resource: Attachment whose `data` is hex (default) or base64 text.

    Returns:
        bytes: Decoded attachment content.

    Raises:
        AttachmentError: If the encoding is unsupported or the payload is
            malformed.

    Examples:
        decode_payload(Resource(data="48656c6c6f", hash="x"))  # b"Hello"
    """
    encoding = (resource.encoding or "hex").strip().lower()
    if encoding not in PAYLOAD_ENCODINGS:
        error_message = (
            f"Attachment {resource.display_name!r} uses unsupported encoding {encoding!r}; "
            f"expected one of: {', '.join(PAYLOAD_ENCODINGS)}"
        )
        raise AttachmentError(error_message)

    payload = "".join(resource.data.split())
    try:
        if encoding == "hex":
            return bytes.fromhex(payload)
        return base64.b64decode(payload, validate=True)
    except (ValueError, binascii.Error) as error:
        error_message = f"Attachment {resource.display_name!r} has a malformed {encoding} payload: {error}"
        raise AttachmentError(error_message) from error
