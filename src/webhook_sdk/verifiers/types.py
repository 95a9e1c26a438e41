"""
Type definitions for webhook signature verifiers

This module provides the verifier type discriminator, the options accepted by
every verifier, and the abstract Verifier contract the algorithms implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, List, Mapping, Optional, Type, Union

from ..config.webhook_config import get_default_secret
from ..constants import DEFAULT_TOLERANCE
from ..exceptions import UnsupportedVerifierError, WebhookError, WebhookVerificationError

# A payload is either the raw body or a structure to canonicalize before hashing
Payload = Union[str, bytes, Mapping[str, Any], List[Any], int, float, bool, None]

SignatureTransformer = Callable[[str], str]


class VerifierType(str, Enum):
    """Supported verifier types"""
    SECRET_KEY = "secretKey"
    SHA1 = "sha1"
    SHA256 = "sha256"
    BASE64_SHA1 = "base64Sha1"
    BASE64_SHA256 = "base64Sha256"
    TIMESTAMP_SCHEME = "timestampScheme"
    JSON_WEB_TOKEN = "jsonWebToken"
    NONE = "none"
    SKIP = "skip"

    @classmethod
    def parse(cls, value: Union['VerifierType', str]) -> 'VerifierType':
        """
        Resolve a verifier type from a member, its value or a legacy alias.

        Aliases are the "<name>Verifier" spellings (e.g. "sha1Verifier",
        "jwtVerifier") used by older integrations.

        Raises:
            UnsupportedVerifierError: If the name is not a known verifier type
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
            alias = _VERIFIER_ALIASES.get(value)
            if alias is not None:
                return alias
        raise UnsupportedVerifierError(f"Unsupported verifier type: {value!r}")


_VERIFIER_ALIASES: Dict[str, VerifierType] = {
    **{f"{member.value}Verifier": member for member in VerifierType},
    "jwtVerifier": VerifierType.JSON_WEB_TOKEN,
}

# camelCase keys accepted by VerifyOptions.from_dict
_OPTION_ALIASES = {
    'signatureHeader': 'signature_header',
    'signatureTransformer': 'signature_transformer',
    'currentTimestampOverride': 'current_timestamp_override',
    'eventTimestamp': 'event_timestamp',
    'defaultSecret': 'default_secret',
}


@dataclass(frozen=True)
class VerifyOptions:
    """
    Options for signing and verification

    Attributes:
        signature_header: Header carrying the signature on inbound events
        signature_transformer: Reduces a provider-specific header value to the signature
        current_timestamp_override: Fixed "now" in milliseconds
        event_timestamp: Sender-asserted event time in milliseconds
        tolerance: Maximum allowed timestamp difference in milliseconds
        issuer: JWT issuer claim to attach on sign and assert on verify
        default_secret: Fallback secret for calls that omit one
    """
    signature_header: Optional[str] = None
    signature_transformer: Optional[SignatureTransformer] = None
    current_timestamp_override: Optional[int] = None
    event_timestamp: Optional[int] = None
    tolerance: Optional[int] = None
    issuer: Optional[str] = None
    default_secret: Optional[str] = None

    def __post_init__(self):
        """Validate options after initialization"""
        if self.tolerance is not None and self.tolerance < 0:
            raise ValueError("Tolerance cannot be negative")
        if self.signature_transformer is not None and not callable(self.signature_transformer):
            raise ValueError("Signature transformer must be callable")

    @property
    def effective_tolerance(self) -> int:
        """Tolerance in milliseconds, falling back to the default window"""
        return DEFAULT_TOLERANCE if self.tolerance is None else self.tolerance

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'VerifyOptions':
        """Build options from snake_case or camelCase keys"""
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown verify option: {key}")
            values[name] = value
        return cls(**values)


class Verifier(ABC):
    """
    Base class for signature verifiers

    A verifier signs payloads and verifies signatures for a single scheme.
    verify() returns True or raises WebhookVerificationError; it never returns
    False. Verifiers keep only their options and are safe to share.
    """

    type: ClassVar[VerifierType]

    def __init__(self, options: Optional[VerifyOptions] = None):
        self.options = options or VerifyOptions()

    @abstractmethod
    def sign(self, payload: Payload, secret: Optional[str] = None) -> str:
        """Sign payload with secret and return the signature"""
        ...

    @abstractmethod
    def verify(self, payload: Payload, secret: Optional[str] = None, signature: Optional[str] = None) -> bool:
        """Return True if signature is valid for payload and secret, raise otherwise"""
        ...

    def resolve_secret(self, secret: Optional[str]) -> str:
        """Pick the explicit secret, else the configured fallback"""
        if secret is not None:
            return secret
        if self.options.default_secret is not None:
            return self.options.default_secret
        return get_default_secret()

    def require_secret(
        self,
        secret: Optional[str],
        error: Type[WebhookError] = WebhookVerificationError
    ) -> str:
        """
        Resolve the secret and reject an empty one.

        An empty key is never accepted: signatures keyed by it are forgeable.

        Raises:
            WebhookError: `error` with a "missing secret" detail
        """
        resolved = self.resolve_secret(secret)
        if not resolved:
            raise error.with_detail("missing secret")
        return resolved

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(type={self.type.value!r})"
