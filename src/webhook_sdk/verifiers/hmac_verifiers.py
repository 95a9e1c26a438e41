"""
HMAC signature verifiers

Hex verifiers (sha1, sha256) key the HMAC with the secret's UTF-8 bytes and
emit "<algorithm>=<hex digest>", as GitHub-style providers do. Base64
verifiers (base64Sha1, base64Sha256) key the HMAC with the base64-decoded
secret and emit the base64 digest with no prefix, as Svix-style providers do.

Both families canonicalize structured payloads the same way on sign and
verify, and compare signatures in constant time.
"""

import base64
from typing import ClassVar, Optional

from ..exceptions import WebhookSignError, WebhookVerificationError
from .types import Payload, Verifier, VerifierType
from .utils import canonicalize_payload, compute_hmac, constant_time_equals, decode_base64_secret


class HmacHexVerifier(Verifier):
    """HMAC verifier producing "<algorithm>=<hex digest>" signatures"""

    algorithm: ClassVar[str]

    def _create_signature(self, payload: Payload, secret: str) -> str:
        digest = compute_hmac(self.algorithm, secret.encode('utf-8'), canonicalize_payload(payload))
        return f"{self.algorithm}={digest.hex()}"

    def sign(self, payload: Payload, secret: Optional[str] = None) -> str:
        try:
            return self._create_signature(payload, self.require_secret(secret, WebhookSignError))
        except Exception as e:
            if isinstance(e, WebhookSignError):
                raise
            raise WebhookSignError.with_detail(e) from e

    def verify(self, payload: Payload, secret: Optional[str] = None, signature: Optional[str] = None) -> bool:
        """
        Verify a "<algorithm>=<hex digest>" signature.

        The algorithm named in the signature prefix must be this verifier's
        algorithm; a signature labelled with another hash never verifies.

        Raises:
            WebhookVerificationError: If the signature is missing, malformed,
                labelled with another algorithm or does not match
        """
        try:
            if not signature:
                raise WebhookVerificationError.with_detail("missing signature")

            algorithm, separator, _ = signature.partition('=')
            if not separator:
                raise WebhookVerificationError.with_detail("malformed signature")
            if algorithm != self.algorithm:
                raise WebhookVerificationError.with_detail(
                    f"expected {self.algorithm} signature, got {algorithm or 'none'}"
                )

            expected = self._create_signature(payload, self.require_secret(secret))
            if not constant_time_equals(expected, signature):
                raise WebhookVerificationError.with_detail("signature mismatch")
            return True

        except Exception as e:
            if isinstance(e, WebhookVerificationError):
                raise
            raise WebhookVerificationError.with_detail(e) from e


class Sha1Verifier(HmacHexVerifier):
    """HMAC-SHA1 hex verifier"""
    type = VerifierType.SHA1
    algorithm = 'sha1'


class Sha256Verifier(HmacHexVerifier):
    """HMAC-SHA256 hex verifier"""
    type = VerifierType.SHA256
    algorithm = 'sha256'


class Base64HmacVerifier(Verifier):
    """HMAC verifier keyed by a base64 secret producing base64 signatures"""

    algorithm: ClassVar[str]

    def _create_signature(self, payload: Payload, secret: str) -> str:
        key = decode_base64_secret(secret)
        digest = compute_hmac(self.algorithm, key, canonicalize_payload(payload))
        return base64.b64encode(digest).decode('ascii')

    def sign(self, payload: Payload, secret: Optional[str] = None) -> str:
        try:
            return self._create_signature(payload, self.require_secret(secret, WebhookSignError))
        except Exception as e:
            if isinstance(e, WebhookSignError):
                raise
            raise WebhookSignError.with_detail(e) from e

    def verify(self, payload: Payload, secret: Optional[str] = None, signature: Optional[str] = None) -> bool:
        try:
            if not signature:
                raise WebhookVerificationError.with_detail("missing signature")

            expected = self._create_signature(payload, self.require_secret(secret))
            if not constant_time_equals(expected, signature):
                raise WebhookVerificationError.with_detail("signature mismatch")
            return True

        except Exception as e:
            if isinstance(e, WebhookVerificationError):
                raise
            raise WebhookVerificationError.with_detail(e) from e


class Base64Sha1Verifier(Base64HmacVerifier):
    """Base64 HMAC-SHA1 verifier"""
    type = VerifierType.BASE64_SHA1
    algorithm = 'sha1'


class Base64Sha256Verifier(Base64HmacVerifier):
    """Base64 HMAC-SHA256 verifier"""
    type = VerifierType.BASE64_SHA256
    algorithm = 'sha256'
