"""
Utility functions for webhook signature verifiers

This module provides the payload canonicalization shared by every HMAC-based
verifier, HMAC computation over the cryptography package, constant-time
comparison, lenient base64 secret decoding and timestamp helpers.
"""

import base64
import json
import re
import time
from typing import Optional

from cryptography.hazmat.primitives import constant_time, hashes
from cryptography.hazmat.primitives import hmac as crypto_hmac

from .types import Payload

HASH_ALGORITHMS = {
    'sha1': hashes.SHA1,
    'sha256': hashes.SHA256,
}

# Prefix carried by Svix-style base64 secrets
BASE64_SECRET_PREFIX = "whsec_"

# Escaped backslashes are matched first so "\\u00e9" (literal text) is left alone
_JSON_ESCAPE_PATTERN = re.compile(r'\\\\|\\u[0-9a-f]{4}')
_BASE64_INVALID_CHARS = re.compile(r'[^A-Za-z0-9+/]')


def _uppercase_unicode_escape(match: 're.Match[str]') -> str:
    escape = match.group(0)
    if escape == '\\\\':
        return escape
    return '\\u' + escape[2:].upper()


def canonicalize_payload(payload: Payload) -> str:
    """
    Convert a payload to the exact string that is signed.

    Strings pass through unchanged and bytes are decoded as UTF-8. Anything
    else is serialized as compact JSON (the JSON.stringify form) with
    \\uXXXX escapes rewritten using uppercase hex digits.

    Args:
        payload: Raw body or JSON-serializable structure

    Returns:
        str: Canonical signing string

    Raises:
        TypeError: If the payload is not JSON serializable
        ValueError: If the payload contains non-finite floats
        UnicodeDecodeError: If a bytes payload is not valid UTF-8
    """
    if isinstance(payload, str):
        return payload
    if isinstance(payload, (bytes, bytearray)):
        return bytes(payload).decode('utf-8')

    serialized = json.dumps(payload, separators=(',', ':'), ensure_ascii=False, allow_nan=False)
    return _JSON_ESCAPE_PATTERN.sub(_uppercase_unicode_escape, serialized)


def compute_hmac(algorithm: str, key: bytes, message: str) -> bytes:
    """
    Compute an HMAC digest.

    Args:
        algorithm: Hash name ('sha1' or 'sha256')
        key: Raw key bytes
        message: Message to authenticate, encoded as UTF-8

    Returns:
        bytes: Raw digest

    Raises:
        ValueError: If the algorithm is not supported
    """
    hash_class = HASH_ALGORITHMS.get(algorithm)
    if hash_class is None:
        raise ValueError(f"Unsupported hash algorithm: {algorithm}")

    mac = crypto_hmac.HMAC(key, hash_class())
    mac.update(message.encode('utf-8'))
    return mac.finalize()


def constant_time_equals(expected: str, provided: str) -> bool:
    """
    Compare two signatures without leaking where they differ.

    Only the lengths, which are not secret, are allowed to short-circuit.
    """
    expected_bytes = expected.encode('utf-8')
    provided_bytes = provided.encode('utf-8')
    if len(expected_bytes) != len(provided_bytes):
        return False
    return constant_time.bytes_eq(expected_bytes, provided_bytes)


def decode_base64_secret(secret: str) -> bytes:
    """
    Decode a base64 webhook secret into raw key bytes.

    Decoding is lenient like the reference libraries of the providers that
    issue such secrets: a "whsec_" prefix is dropped, URL-safe characters are
    accepted, characters outside the alphabet (including padding) are ignored
    and a single dangling trailing character is discarded.

    Raises:
        ValueError: If the secret yields no key bytes
    """
    if secret.startswith(BASE64_SECRET_PREFIX):
        secret = secret[len(BASE64_SECRET_PREFIX):]

    normalized = _BASE64_INVALID_CHARS.sub('', secret.replace('-', '+').replace('_', '/'))
    if len(normalized) % 4 == 1:
        normalized = normalized[:-1]
    normalized += '=' * (-len(normalized) % 4)

    key = base64.b64decode(normalized, validate=True)
    if not key:
        raise ValueError("Secret is not valid base64")
    return key


def current_timestamp_ms() -> int:
    """Current Unix time in milliseconds"""
    return int(time.time() * 1000)


def timestamp_difference(timestamp: int, current_timestamp: Optional[int] = None) -> int:
    """
    Absolute difference between a timestamp and now, in milliseconds.

    Args:
        timestamp: Timestamp to check, in milliseconds
        current_timestamp: Override for "now" (uses the clock if None)
    """
    now = current_timestamp_ms() if current_timestamp is None else current_timestamp
    return abs(now - timestamp)
