"""
Webhook signing and verification entry points

sign_payload() and verify_signature() work on a bare payload/secret pair.
verify_event() extracts the body and signature from an inbound event, checks
the optional event timestamp, and delegates to the selected verifier.
"""

import logging
from dataclasses import fields
from typing import Any, Mapping, Optional, Union

from ..config.webhook_config import get_config
from ..constants import DEFAULT_WEBHOOK_SIGNATURE_HEADER
from ..exceptions import WebhookVerificationError
from ..verifiers.registry import create_verifier
from ..verifiers.types import Payload, VerifierType, VerifyOptions
from ..verifiers.utils import timestamp_difference
from .event import WebhookEvent

logger = logging.getLogger(__name__)

OptionsLike = Optional[Union[VerifyOptions, Mapping[str, Any]]]
EventLike = Union[WebhookEvent, Mapping[str, Any]]


def _coerce_options(options: OptionsLike) -> VerifyOptions:
    """Fill every option the caller left unset from the active configuration"""
    if options is None:
        return get_config().to_verify_options()
    if not isinstance(options, VerifyOptions):
        options = VerifyOptions.from_dict(options)
    explicit = {f.name: getattr(options, f.name) for f in fields(options)}
    return get_config().to_verify_options(**{k: v for k, v in explicit.items() if v is not None})


def _coerce_event(event: EventLike) -> WebhookEvent:
    if isinstance(event, WebhookEvent):
        return event
    return WebhookEvent.from_dict(event)


def signature_from_event(
    event: EventLike,
    signature_header: str = DEFAULT_WEBHOOK_SIGNATURE_HEADER
) -> Optional[str]:
    """
    Extract the signature header from an event.

    Args:
        event: WebhookEvent or API Gateway style dictionary
        signature_header: Header name (case-insensitive)

    Returns:
        Optional[str]: Header value, or None if absent
    """
    return _coerce_event(event).get_header(signature_header)


def sign_payload(
    verifier_type: Union[VerifierType, str],
    payload: Payload,
    secret: Optional[str] = None,
    options: OptionsLike = None
) -> str:
    """
    Sign a payload with the given verifier type.

    Args:
        verifier_type: Verifier type to sign with
        payload: Raw body or JSON-serializable structure
        secret: Secret (falls back to the configured default when None)
        options: Verifier options

    Returns:
        str: Signature

    Raises:
        WebhookSignError: If the payload cannot be signed
    """
    return create_verifier(verifier_type, _coerce_options(options)).sign(payload, secret)


def verify_signature(
    verifier_type: Union[VerifierType, str],
    payload: Payload,
    signature: Optional[str],
    secret: Optional[str] = None,
    options: OptionsLike = None
) -> bool:
    """
    Verify a signature for a payload.

    Returns:
        bool: Always True; failures raise

    Raises:
        WebhookVerificationError: If the signature does not verify
    """
    return create_verifier(verifier_type, _coerce_options(options)).verify(payload, secret, signature)


def verify_event(
    verifier_type: Union[VerifierType, str],
    event: EventLike,
    payload: Optional[Payload] = None,
    secret: Optional[str] = None,
    options: OptionsLike = None
) -> bool:
    """
    Verify that an inbound event carries a valid signature.

    Args:
        verifier_type: Verifier type to verify with
        event: WebhookEvent or API Gateway style dictionary
        payload: Body to verify instead of the event body
        secret: Secret (falls back to the configured default when None)
        options: Verifier options; signature_header, signature_transformer,
            event_timestamp and tolerance are used here

    Returns:
        bool: Always True; failures raise

    Raises:
        WebhookVerificationError: If the event timestamp is outside the
            tolerance window or the signature does not verify
    """
    options = _coerce_options(options)
    event = _coerce_event(event)

    body = payload if payload is not None else event.decoded_body()

    signature = signature_from_event(event, options.signature_header)
    if signature is not None and options.signature_transformer is not None:
        try:
            signature = options.signature_transformer(signature)
        except Exception as e:
            if isinstance(e, WebhookVerificationError):
                raise
            raise WebhookVerificationError.with_detail(e) from e

    if options.event_timestamp is not None:
        difference = timestamp_difference(options.event_timestamp, options.current_timestamp_override)
        logger.debug(f"Event timestamp differs from now by {difference}ms")
        if difference > options.effective_tolerance:
            raise WebhookVerificationError.with_detail("event timestamp outside tolerance")

    return create_verifier(verifier_type, options).verify(body, secret, signature)
