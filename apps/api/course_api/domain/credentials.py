"""HTTP Basic credential extraction."""

from __future__ import annotations

import base64
import binascii

from course_api.schemas.auth import Credentials

BASIC_SCHEME = "basic"


def parse_basic_authorization(header_value: str | None) -> Credentials | None:
    """Parse ``Basic <base64(identifier:secret)>`` into credentials.

    Returns ``None`` when the header is missing, uses another scheme, carries
    malformed base64 or has no ``:`` separator. The secret may itself contain
    ``:``; only the first one splits.
    """
    if not header_value:
        return None

    scheme, _, payload = header_value.strip().partition(" ")
    if scheme.lower() != BASIC_SCHEME:
        return None

    payload = payload.strip()
    if not payload:
        return None

    try:
        decoded = base64.b64decode(payload, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None

    identifier, separator, secret = decoded.partition(":")
    if not separator:
        return None

    return Credentials(identifier=identifier, secret=secret)
