"""
JSON Web Token verifier

The signature is an HS256 JWT keyed by the secret. Object payloads become the
token claims (with an "iss" claim when an issuer is configured); string
payloads become the raw token body. Verification is decided by the token
signature and its registered claims, not by comparing the payload.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional

import jwt
from jwt import PyJWS

from ..exceptions import WebhookSignError, WebhookVerificationError
from .types import Payload, Verifier, VerifierType
from .utils import canonicalize_payload

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"

_jws = PyJWS()


def _parse_claims(body: bytes) -> Optional[Dict[str, Any]]:
    """Return the token body as claims, or None for a raw (non-object) body"""
    try:
        claims = json.loads(body)
    except ValueError:
        return None
    return claims if isinstance(claims, dict) else None


class JsonWebTokenVerifier(Verifier):
    """HS256 JWT verifier with optional issuer enforcement"""

    type = VerifierType.JSON_WEB_TOKEN

    def sign(self, payload: Payload, secret: Optional[str] = None) -> str:
        """
        Sign a payload as an HS256 JWT.

        Raises:
            WebhookSignError: If an issuer is configured and the payload is
                not an object, or the token cannot be encoded
        """
        secret = self.require_secret(secret, WebhookSignError)
        issuer = self.options.issuer

        try:
            if isinstance(payload, Mapping):
                claims = dict(payload)
                if issuer:
                    claims['iss'] = issuer
                return jwt.encode(claims, secret, algorithm=JWT_ALGORITHM)

            if issuer:
                raise WebhookSignError.with_detail("payload must be an object to carry an issuer claim")

            body = canonicalize_payload(payload).encode('utf-8')
            # A raw body carries no claims, so the header has no "typ"
            return _jws.encode(body, secret, algorithm=JWT_ALGORITHM, headers={'typ': None})

        except Exception as e:
            if isinstance(e, WebhookSignError):
                raise
            raise WebhookSignError.with_detail(e) from e

    def verify(self, payload: Payload, secret: Optional[str] = None, signature: Optional[str] = None) -> bool:
        """
        Verify an HS256 JWT.

        Raises:
            WebhookVerificationError: If the token signature is invalid, a
                registered claim fails validation, or the issuer does not match
        """
        if payload is None or (isinstance(payload, (str, bytes, Mapping, list)) and len(payload) == 0):
            logger.warning("Missing payload for jsonWebToken verification")

        secret = self.require_secret(secret)
        issuer = self.options.issuer

        try:
            decoded = _jws.decode_complete(signature, secret, algorithms=[JWT_ALGORITHM])
            claims = _parse_claims(decoded['payload'])

            if claims is None:
                if issuer:
                    raise WebhookVerificationError.with_detail("token has no claims to match the issuer")
                return True

            jwt.decode(signature, secret, algorithms=[JWT_ALGORITHM], issuer=issuer)
            return True

        except Exception as e:
            if isinstance(e, WebhookVerificationError):
                raise
            raise WebhookVerificationError.with_detail(e) from e
