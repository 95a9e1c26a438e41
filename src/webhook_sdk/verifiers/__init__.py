"""
Webhook SDK - Signature Verifiers

Pluggable signing and verification strategies behind a single Verifier
contract, and the registry that constructs them by type name.
"""

from .types import (
    Payload,
    SignatureTransformer,
    Verifier,
    VerifierType,
    VerifyOptions,
)

from .hmac_verifiers import (
    HmacHexVerifier,
    Sha1Verifier,
    Sha256Verifier,
    Base64HmacVerifier,
    Base64Sha1Verifier,
    Base64Sha256Verifier,
)
from .secret_key import SecretKeyVerifier
from .timestamp_scheme import TimestampSchemeVerifier
from .jwt_verifier import JsonWebTokenVerifier
from .skip import NoneVerifier, SkipVerifier

from .registry import (
    VERIFIER_FACTORIES,
    SUPPORTED_VERIFIER_TYPES,
    create_verifier,
)

from .utils import (
    canonicalize_payload,
    constant_time_equals,
    decode_base64_secret,
    current_timestamp_ms,
)

# Public API exports
__all__ = [
    # Types
    'Payload',
    'SignatureTransformer',
    'Verifier',
    'VerifierType',
    'VerifyOptions',
    # Verifiers
    'HmacHexVerifier',
    'Sha1Verifier',
    'Sha256Verifier',
    'Base64HmacVerifier',
    'Base64Sha1Verifier',
    'Base64Sha256Verifier',
    'SecretKeyVerifier',
    'TimestampSchemeVerifier',
    'JsonWebTokenVerifier',
    'NoneVerifier',
    'SkipVerifier',
    # Registry
    'VERIFIER_FACTORIES',
    'SUPPORTED_VERIFIER_TYPES',
    'create_verifier',
    # Utilities
    'canonicalize_payload',
    'constant_time_equals',
    'decode_base64_secret',
    'current_timestamp_ms',
]
