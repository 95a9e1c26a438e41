"""
No-op verifiers

The "none" and "skip" verifiers accept every signature. They let an
integration be wired end to end before a real secret exists, and are only
reachable by naming them explicitly; every use is logged as a warning.
"""

import logging
from typing import Optional

from .types import Payload, Verifier, VerifierType

logger = logging.getLogger(__name__)


class NoOpVerifier(Verifier):
    """Verifier that produces no signature and accepts any signature"""

    def sign(self, payload: Payload, secret: Optional[str] = None) -> str:
        logger.warning(f"The {self.type.value} verifier does not sign payloads; returning an empty signature")
        return ""

    def verify(self, payload: Payload, secret: Optional[str] = None, signature: Optional[str] = None) -> bool:
        logger.warning(f"The {self.type.value} verifier accepts all signatures; the payload was not verified")
        return True


class NoneVerifier(NoOpVerifier):
    type = VerifierType.NONE


class SkipVerifier(NoOpVerifier):
    type = VerifierType.SKIP
