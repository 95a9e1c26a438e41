"""
Verifier registry

Maps every verifier type to the class that implements it. create_verifier()
is the single construction entry point.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Type, Union

from .types import Verifier, VerifierType, VerifyOptions
from .hmac_verifiers import Base64Sha1Verifier, Base64Sha256Verifier, Sha1Verifier, Sha256Verifier
from .jwt_verifier import JsonWebTokenVerifier
from .secret_key import SecretKeyVerifier
from .skip import NoneVerifier, SkipVerifier
from .timestamp_scheme import TimestampSchemeVerifier

logger = logging.getLogger(__name__)

VERIFIER_FACTORIES: Dict[VerifierType, Type[Verifier]] = {
    VerifierType.SECRET_KEY: SecretKeyVerifier,
    VerifierType.SHA1: Sha1Verifier,
    VerifierType.SHA256: Sha256Verifier,
    VerifierType.BASE64_SHA1: Base64Sha1Verifier,
    VerifierType.BASE64_SHA256: Base64Sha256Verifier,
    VerifierType.TIMESTAMP_SCHEME: TimestampSchemeVerifier,
    VerifierType.JSON_WEB_TOKEN: JsonWebTokenVerifier,
    VerifierType.NONE: NoneVerifier,
    VerifierType.SKIP: SkipVerifier,
}

SUPPORTED_VERIFIER_TYPES = tuple(member.value for member in VerifierType)


def create_verifier(
    verifier_type: Union[VerifierType, str],
    options: Optional[Union[VerifyOptions, Mapping[str, Any]]] = None
) -> Verifier:
    """
    Create a verifier for the given type.

    Args:
        verifier_type: Verifier type member, value or legacy alias
        options: VerifyOptions, a dict of option keys, or None

    Returns:
        Verifier: Verifier configured with the options

    Raises:
        UnsupportedVerifierError: If the verifier type is unknown
    """
    resolved_type = VerifierType.parse(verifier_type)
    factory = VERIFIER_FACTORIES[resolved_type]

    if options is not None and not isinstance(options, VerifyOptions):
        options = VerifyOptions.from_dict(options)

    logger.debug(f"Creating {resolved_type.value} verifier")
    if options is None:
        return factory()
    return factory(options)
