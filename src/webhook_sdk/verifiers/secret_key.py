"""
Shared-secret verifier

The signature is the secret itself, for integrations that send a static
token in a header. The payload is not signed and the comparison is a plain
equality check, not constant-time. Use it only for trusted, low-sensitivity
integrations.
"""

import logging
from typing import Optional

from ..exceptions import WebhookSignError, WebhookVerificationError
from .types import Payload, Verifier, VerifierType

logger = logging.getLogger(__name__)


class SecretKeyVerifier(Verifier):
    """Verifier that checks the signature equals the shared secret"""

    type = VerifierType.SECRET_KEY

    def sign(self, payload: Payload, secret: Optional[str] = None) -> str:
        logger.warning("The secretKey verifier does not sign payloads; the secret is used as the signature")
        return self.require_secret(secret, WebhookSignError)

    def verify(self, payload: Payload, secret: Optional[str] = None, signature: Optional[str] = None) -> bool:
        if signature != self.require_secret(secret):
            raise WebhookVerificationError()
        return True
