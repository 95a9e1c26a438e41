"""
Webhook SDK - Event Adapter

Entry points for signing payloads and verifying signatures, either directly
or from an inbound webhook event.
"""

from .event import WebhookEvent, find_header_case_insensitive
from .handler import (
    sign_payload,
    verify_signature,
    verify_event,
    signature_from_event,
)
from .transformers import (
    versioned_signature_transformer,
    prefix_stripping_transformer,
)

__all__ = [
    'WebhookEvent',
    'find_header_case_insensitive',
    'sign_payload',
    'verify_signature',
    'verify_event',
    'signature_from_event',
    'versioned_signature_transformer',
    'prefix_stripping_transformer',
]
