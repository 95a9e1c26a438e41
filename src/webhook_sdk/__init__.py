"""
Webhook SDK
Pluggable webhook signature signing and verification
"""

from .version import __version__
from .constants import (
    DEFAULT_TOLERANCE,
    DEFAULT_WEBHOOK_SIGNATURE_HEADER,
    DEFAULT_SECRET_ENV_VAR,
)
from .exceptions import (
    WebhookError,
    WebhookVerificationError,
    WebhookSignError,
    UnsupportedVerifierError,
    ConfigurationError,
)
from .config import (
    WebhookConfig,
    get_config,
    set_config,
    reset_config,
    get_default_secret,
    load_config_from_env,
    load_config_from_json,
    load_config_from_file,
)
from .verifiers import (
    Verifier,
    VerifierType,
    VerifyOptions,
    VERIFIER_FACTORIES,
    SUPPORTED_VERIFIER_TYPES,
    create_verifier,
    canonicalize_payload,
)
from .webhooks import (
    WebhookEvent,
    sign_payload,
    verify_signature,
    verify_event,
    signature_from_event,
    versioned_signature_transformer,
    prefix_stripping_transformer,
)

# Public API exports
__all__ = [
    '__version__',
    # Constants
    'DEFAULT_TOLERANCE',
    'DEFAULT_WEBHOOK_SIGNATURE_HEADER',
    'DEFAULT_SECRET_ENV_VAR',
    # Exceptions
    'WebhookError',
    'WebhookVerificationError',
    'WebhookSignError',
    'UnsupportedVerifierError',
    'ConfigurationError',
    # Configuration
    'WebhookConfig',
    'get_config',
    'set_config',
    'reset_config',
    'get_default_secret',
    'load_config_from_env',
    'load_config_from_json',
    'load_config_from_file',
    # Verifiers
    'Verifier',
    'VerifierType',
    'VerifyOptions',
    'VERIFIER_FACTORIES',
    'SUPPORTED_VERIFIER_TYPES',
    'create_verifier',
    'canonicalize_payload',
    # Event adapter
    'WebhookEvent',
    'sign_payload',
    'verify_signature',
    'verify_event',
    'signature_from_event',
    'versioned_signature_transformer',
    'prefix_stripping_transformer',
]
