"""
Timestamp scheme verifier

Replay-resistant HMAC-SHA256 in the style of Stripe signatures. The signed
material is "<timestamp>.<payload>" and the signature is "t=<timestamp>,v1=<hex>".
Timestamps are Unix milliseconds. Because the timestamp is part of the signed
material, the replay window cannot be extended without invalidating the HMAC.
"""

import re
from typing import Optional

from ..exceptions import WebhookSignError, WebhookVerificationError
from .types import Payload, Verifier, VerifierType
from .utils import (
    canonicalize_payload,
    compute_hmac,
    constant_time_equals,
    current_timestamp_ms,
    timestamp_difference,
)

SIGNATURE_PATTERN = re.compile(r't=(\d+),v1=([0-9a-f]+)')


class TimestampSchemeVerifier(Verifier):
    """HMAC-SHA256 verifier with an embedded timestamp and a tolerance window"""

    type = VerifierType.TIMESTAMP_SCHEME

    @staticmethod
    def _digest(payload: Payload, secret: str, timestamp: int) -> str:
        signed_payload = f"{timestamp}.{canonicalize_payload(payload)}"
        return compute_hmac('sha256', secret.encode('utf-8'), signed_payload).hex()

    def sign(self, payload: Payload, secret: Optional[str] = None, timestamp: Optional[int] = None) -> str:
        """
        Sign a payload.

        Args:
            payload: Raw body or JSON-serializable structure
            secret: Shared secret (falls back to the configured default)
            timestamp: Signing time in milliseconds; defaults to the
                current_timestamp_override option, then the clock

        Returns:
            str: "t=<timestamp>,v1=<hex digest>"
        """
        if timestamp is None:
            timestamp = self.options.current_timestamp_override
        if timestamp is None:
            timestamp = current_timestamp_ms()

        try:
            secret = self.require_secret(secret, WebhookSignError)
            return f"t={timestamp},v1={self._digest(payload, secret, timestamp)}"
        except Exception as e:
            if isinstance(e, WebhookSignError):
                raise
            raise WebhookSignError.with_detail(e) from e

    def verify(self, payload: Payload, secret: Optional[str] = None, signature: Optional[str] = None) -> bool:
        """
        Verify a "t=<timestamp>,v1=<hex>" signature.

        Raises:
            WebhookVerificationError: If the secret is empty, the signature is
                malformed, the timestamp is outside the tolerance window or
                the digest does not match
        """
        secret = self.require_secret(secret)

        match = SIGNATURE_PATTERN.search(signature) if isinstance(signature, str) else None
        if not match:
            raise WebhookVerificationError.with_detail("malformed signature")

        signed_timestamp = int(match.group(1))
        signed_digest = match.group(2)

        difference = timestamp_difference(signed_timestamp, self.options.current_timestamp_override)
        if difference > self.options.effective_tolerance:
            raise WebhookVerificationError.with_detail("timestamp outside tolerance")

        try:
            expected = self._digest(payload, secret, signed_timestamp)
        except Exception as e:
            raise WebhookVerificationError.with_detail(e) from e

        if not constant_time_equals(expected, signed_digest):
            raise WebhookVerificationError.with_detail("signature mismatch")
        return True
