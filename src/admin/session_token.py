"""Self-contained signed session tokens for the admin area.

A token is ``<payload>.<signature>`` where ``payload`` is the base64url encoded
JSON ``{"u": username, "exp": expiry_epoch_millis}`` and ``signature`` is the
base64url encoded HMAC-SHA256 of the payload *segment* (the encoded text, not
the decoded JSON), keyed with the server secret. There is no server-side
session table: the token is the session.
"""

import base64
import binascii
import hashlib
import hmac
import json
import time
from dataclasses import dataclass
from datetime import timedelta


def now_millis() -> float:
    return time.time() * 1000


def b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def b64url_decode(segment: str) -> bytes | None:
    """Decode an unpadded base64url segment, returning None when it is malformed."""
    try:
        padded = segment.replace("-", "+").replace("_", "/") + "=" * (-len(segment) % 4)
        return base64.b64decode(padded, validate=True)
    except (binascii.Error, ValueError):
        return None


def sign_segment(segment: str, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), segment.encode("utf-8"), hashlib.sha256).digest()
    return b64url_encode(digest)


@dataclass(frozen=True)
class SessionPayload:
    username: str
    expires_at: int  # epoch millis

    def to_json(self) -> str:
        return json.dumps({"u": self.username, "exp": self.expires_at}, separators=(",", ":"))

    @classmethod
    def parse(cls, raw: bytes) -> "SessionPayload | None":
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            return None
        if not isinstance(data, dict):
            return None

        username = data.get("u")
        expires_at = data.get("exp")
        if not isinstance(username, str) or not username:
            return None
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            return None
        return cls(username=username, expires_at=expires_at)


@dataclass(frozen=True)
class SessionVerification:
    allowed: bool
    username: str | None = None

    @classmethod
    def deny(cls) -> "SessionVerification":
        return cls(allowed=False)


def encode_session_token(payload: SessionPayload, secret: str) -> str:
    payload_segment = b64url_encode(payload.to_json().encode("utf-8"))
    return f"{payload_segment}.{sign_segment(payload_segment, secret)}"


def issue_session_token(
    username: str,
    secret: str,
    ttl: timedelta,
    now: float | None = None,
) -> tuple[str, SessionPayload]:
    """Mint a token for ``username`` expiring ``ttl`` from now."""
    issued_at = now_millis() if now is None else now
    payload = SessionPayload(
        username=username,
        expires_at=int(issued_at + ttl.total_seconds() * 1000),
    )
    return encode_session_token(payload, secret), payload


def verify_session_token(token: str, secret: str, now: float | None = None) -> SessionVerification:
    """Check structure, expiry and signature of a token. Never raises."""
    if not token or not secret:
        return SessionVerification.deny()

    parts = token.split(".")
    if len(parts) != 2:
        return SessionVerification.deny()
    payload_segment, signature_segment = parts

    raw = b64url_decode(payload_segment)
    if raw is None:
        return SessionVerification.deny()

    payload = SessionPayload.parse(raw)
    if payload is None:
        return SessionVerification.deny()

    current = now_millis() if now is None else now
    if not payload.expires_at > current:
        return SessionVerification.deny()

    expected = sign_segment(payload_segment, secret)
    if not hmac.compare_digest(signature_segment.encode("utf-8"), expected.encode("utf-8")):
        return SessionVerification.deny()

    return SessionVerification(allowed=True, username=payload.username)
