"""
Unit tests for the webhook event adapter

This module tests sign_payload, verify_signature, signature_from_event and
verify_event, including base64 bodies, signature transformers and the event
timestamp check.
"""

import base64
import hashlib
import hmac
import time

import pytest

from webhook_sdk import (
    DEFAULT_WEBHOOK_SIGNATURE_HEADER,
    VerifyOptions,
    WebhookConfig,
    WebhookEvent,
    WebhookSignError,
    WebhookVerificationError,
    prefix_stripping_transformer,
    set_config,
    sign_payload,
    signature_from_event,
    verify_event,
    verify_signature,
    versioned_signature_transformer,
)

PAYLOAD = "No more secrets, Marty."
SECRET = "MY_VOICE_IS_MY_PASSPORT_VERIFY_ME"


def now_ms():
    return int(time.time() * 1000)


def build_event(payload, signature, signature_header=DEFAULT_WEBHOOK_SIGNATURE_HEADER, is_base64_encoded=False):
    """Build an API Gateway style event dictionary"""
    body = base64.b64encode(payload.encode('utf-8')).decode('ascii') if is_base64_encoded else payload
    return {
        'body': body,
        'headers': {signature_header.lower(): signature},
        'isBase64Encoded': is_base64_encoded,
        'httpMethod': 'POST',
        'path': '/webhooks',
    }


class TestWebhookEvent:
    """Test the event model"""

    def test_headers_case_insensitive(self):
        """Test header lookup ignores case"""
        event = WebhookEvent(headers={'Rw-Webhook-Signature': 'sig'})

        assert event.get_header('rw-webhook-signature') == 'sig'
        assert event.get_header('RW-WEBHOOK-SIGNATURE') == 'sig'
        assert event.get_header('missing') is None

    def test_from_dict(self):
        """Test API Gateway dictionaries are accepted"""
        event = WebhookEvent.from_dict(build_event(PAYLOAD, 'sig', is_base64_encoded=True))

        assert event.is_base64_encoded is True
        assert event.decoded_body() == PAYLOAD

    def test_missing_body(self):
        """Test a missing body is empty text"""
        assert WebhookEvent(body=None).decoded_body() == ''
        assert WebhookEvent(body=None, is_base64_encoded=True).decoded_body() == ''

    def test_invalid_base64_body(self):
        """Test an undecodable base64 body is a verification failure"""
        with pytest.raises(WebhookVerificationError):
            WebhookEvent(body='%%%not base64', is_base64_encoded=True).decoded_body()

    def test_signature_from_event(self):
        """Test the signature header is read from the event"""
        event = build_event(PAYLOAD, 'sig')

        assert signature_from_event(event) == 'sig'
        assert signature_from_event(event, 'other-header') is None


    def test_default_signature_header(self):
        """Test events are read from the RW-WEBHOOK-SIGNATURE header by default"""
        signature = sign_payload("sha256", PAYLOAD, SECRET)
        event = {'body': PAYLOAD, 'headers': {'rw-webhook-signature': signature}}

        assert DEFAULT_WEBHOOK_SIGNATURE_HEADER == 'RW-WEBHOOK-SIGNATURE'
        assert signature_from_event(event) == signature
        assert verify_event("sha256", event, secret=SECRET) is True


class TestSignAndVerify:
    """Test the payload-level entry points"""

    @pytest.mark.parametrize("verifier_type", ["sha1", "sha256", "timestampScheme", "jsonWebToken", "secretKey"])
    def test_sign_and_verify(self, verifier_type):
        """Test signatures from sign_payload verify"""
        signature = sign_payload(verifier_type, PAYLOAD, SECRET)

        assert verify_signature(verifier_type, PAYLOAD, signature, SECRET) is True

    def test_verify_signature_rejects(self):
        """Test a wrong signature raises"""
        signature = sign_payload("sha256", PAYLOAD, "WERNER_BRANDES")

        with pytest.raises(WebhookVerificationError):
            verify_signature("sha256", PAYLOAD, signature, SECRET)

    def test_options_dictionary(self):
        """Test options may be given as a dictionary"""
        signature = sign_payload("timestampScheme", PAYLOAD, SECRET, options={'currentTimestampOverride': 1000})

        assert signature.startswith('t=1000,')
        assert verify_signature(
            "timestampScheme", PAYLOAD, signature, SECRET, options={'currentTimestampOverride': 2000}
        ) is True


class TestVerifyEvent:
    """Test event verification"""

    def test_verify_event_body(self):
        """Test an event body verifies with a generated signature"""
        signature = sign_payload("timestampScheme", PAYLOAD, SECRET)

        assert verify_event("timestampScheme", build_event(PAYLOAD, signature), secret=SECRET) is True

    def test_verify_base64_event_body(self):
        """Test a base64 encoded body verifies the same as the raw body"""
        signature = sign_payload("sha256", PAYLOAD, SECRET)

        raw_event = build_event(PAYLOAD, signature)
        encoded_event = build_event(PAYLOAD, signature, is_base64_encoded=True)

        assert verify_event("sha256", raw_event, secret=SECRET) is True
        assert verify_event("sha256", encoded_event, secret=SECRET) is True

    def test_verify_event_model(self):
        """Test WebhookEvent instances are accepted"""
        signature = sign_payload("sha1", PAYLOAD, SECRET)
        event = WebhookEvent(headers={'RW-WEBHOOK-SIGNATURE': signature}, body=PAYLOAD)

        assert verify_event("sha1", event, secret=SECRET) is True

    def test_payload_overrides_body(self):
        """Test an explicit payload is verified instead of the event body"""
        signature = sign_payload("timestampScheme", PAYLOAD, SECRET)
        event = build_event('{"body": "something else"}', signature)

        assert verify_event("timestampScheme", event, payload=PAYLOAD, secret=SECRET) is True

    def test_different_secret(self):
        """Test an event signed with another secret is rejected"""
        signature = sign_payload("timestampScheme", PAYLOAD, "WERNER_BRANDES")

        with pytest.raises(WebhookVerificationError):
            verify_event("timestampScheme", build_event(PAYLOAD, signature), secret=SECRET)

    def test_missing_signature_header(self):
        """Test an event without the signature header is rejected"""
        event = WebhookEvent(headers={}, body=PAYLOAD)

        with pytest.raises(WebhookVerificationError):
            verify_event("sha256", event, secret=SECRET)

    def test_custom_signature_header(self):
        """Test the signature header can be chosen"""
        signature = sign_payload("sha256", PAYLOAD, SECRET)
        event = build_event(PAYLOAD, signature, signature_header='X-Hub-Signature-256')

        assert verify_event(
            "sha256", event, secret=SECRET, options=VerifyOptions(signature_header='X-HUB-SIGNATURE-256')
        ) is True

    def test_signed_timestamp_within_tolerance(self):
        """Test a wide tolerance accepts an old timestamp signature"""
        signature = sign_payload(
            "timestampScheme", PAYLOAD, SECRET, options={'currentTimestampOverride': now_ms() - 10 * 60_000}
        )

        assert verify_event(
            "timestampScheme", build_event(PAYLOAD, signature), secret=SECRET, options={'tolerance': 15 * 60_000}
        ) is True

    def test_signed_timestamp_short_tolerance(self):
        """Test a short tolerance rejects an old timestamp signature"""
        signature = sign_payload(
            "timestampScheme", PAYLOAD, SECRET, options={'currentTimestampOverride': now_ms() - 10 * 60_000}
        )

        with pytest.raises(WebhookVerificationError):
            verify_event(
                "timestampScheme", build_event(PAYLOAD, signature), secret=SECRET, options={'tolerance': 5_000}
            )

    def test_event_timestamp_within_tolerance(self):
        """Test a fresh event timestamp passes"""
        signature = sign_payload("sha256", PAYLOAD, SECRET)
        options = VerifyOptions(event_timestamp=1_000_000, current_timestamp_override=1_100_000)

        assert verify_event("sha256", build_event(PAYLOAD, signature), secret=SECRET, options=options) is True

    def test_event_timestamp_outside_tolerance(self):
        """Test a stale event timestamp is rejected even with a valid signature"""
        signature = sign_payload("sha256", PAYLOAD, SECRET)
        options = VerifyOptions(event_timestamp=now_ms() - 10 * 60_000)

        with pytest.raises(WebhookVerificationError, match="event timestamp"):
            verify_event("sha256", build_event(PAYLOAD, signature), secret=SECRET, options=options)

    def test_event_timestamp_checked_for_skip(self):
        """Test the event timestamp check runs before any verifier"""
        options = VerifyOptions(event_timestamp=now_ms() - 10 * 60_000, tolerance=60_000)

        with pytest.raises(WebhookVerificationError):
            verify_event("skip", build_event(PAYLOAD, ''), secret=SECRET, options=options)

    def test_skip_verifier_without_header(self):
        """Test the skip verifier accepts an event without a signature"""
        assert verify_event("skip", WebhookEvent(body=PAYLOAD), secret=SECRET) is True


class TestSignatureTransformers:
    """Test signature transformers"""

    def test_versioned_transformer_picks_v1(self):
        """Test the v1 entry is selected from a multi-signature header"""
        signature = sign_payload("base64Sha256", PAYLOAD, SECRET)
        header = f"v2,bm90LXRoaXMtb25l v1,{signature} v1a,aWdub3JlZA=="
        options = VerifyOptions(
            signature_header='svix-signature',
            signature_transformer=versioned_signature_transformer('v1'),
        )
        event = build_event(PAYLOAD, header, signature_header='svix-signature')

        assert verify_event("base64Sha256", event, secret=SECRET, options=options) is True

    def test_versioned_transformer_missing_version(self):
        """Test a header without the requested version is rejected"""
        transform = versioned_signature_transformer('v1')

        with pytest.raises(WebhookVerificationError):
            transform('v2,abc v3,def')

    def test_untransformed_header_fails(self):
        """Test the raw multi-signature header does not verify"""
        signature = sign_payload("base64Sha256", PAYLOAD, SECRET)
        event = build_event(PAYLOAD, f"v1,{signature} v2,abc", signature_header='svix-signature')

        with pytest.raises(WebhookVerificationError):
            verify_event(
                "base64Sha256", event, secret=SECRET, options=VerifyOptions(signature_header='svix-signature')
            )

    def test_transformer_error_wrapped(self):
        """Test an exception from a transformer surfaces as a verification failure"""
        def first_pair_signature(header):
            return header.split(' ')[0].split(',')[1]

        options = VerifyOptions(signature_transformer=first_pair_signature)
        event = build_event(PAYLOAD, 'v1')

        with pytest.raises(WebhookVerificationError, match="list index out of range"):
            verify_event("sha256", event, secret=SECRET, options=options)

    def test_prefix_stripping_transformer(self):
        """Test a fixed prefix is removed"""
        transform = prefix_stripping_transformer('v0=')

        assert transform('v0=abc') == 'abc'
        assert transform('abc') == 'abc'


class TestDefaultSecret:
    """Test the fallback secret"""

    def test_environment_secret_used_when_omitted(self, monkeypatch):
        """Test WEBHOOK_SECRET is used when no secret is passed"""
        monkeypatch.setenv('WEBHOOK_SECRET', SECRET)
        signature = sign_payload("sha256", PAYLOAD)

        assert signature == sign_payload("sha256", PAYLOAD, SECRET)
        assert verify_signature("sha256", PAYLOAD, signature) is True

    def test_explicit_secret_not_replaced(self):
        """Test an explicit empty secret is not swapped for the fallback"""
        set_config(WebhookConfig(default_secret=SECRET))
        signature = sign_payload("timestampScheme", PAYLOAD)

        with pytest.raises(WebhookVerificationError, match="missing secret"):
            verify_signature("timestampScheme", PAYLOAD, signature, secret="")

    def test_options_default_secret(self):
        """Test a default secret threaded through options takes precedence"""
        set_config(WebhookConfig(default_secret="WERNER_BRANDES"))
        options = VerifyOptions(default_secret=SECRET)

        signature = sign_payload("sha1", PAYLOAD, options=options)
        assert signature == sign_payload("sha1", PAYLOAD, SECRET)

    def test_configured_signature_header(self):
        """Test verify_event reads the configured header when options omit one"""
        set_config(WebhookConfig(signature_header='X-Custom-Signature'))
        signature = sign_payload("sha256", PAYLOAD, SECRET)
        event = build_event(PAYLOAD, signature, signature_header='X-Custom-Signature')

        assert verify_event("sha256", event, secret=SECRET) is True

    def test_no_secret_configured_rejects_forgery(self):
        """Test an empty-key signature is rejected when no secret is passed or configured"""
        forged = "sha256=" + hmac.new(b"", PAYLOAD.encode('utf-8'), hashlib.sha256).hexdigest()

        with pytest.raises(WebhookVerificationError, match="missing secret"):
            verify_signature("sha256", PAYLOAD, forged)
        with pytest.raises(WebhookVerificationError, match="missing secret"):
            verify_signature("secretKey", PAYLOAD, "")

    def test_no_secret_configured_cannot_sign(self):
        """Test signing fails when no secret is passed or configured"""
        with pytest.raises(WebhookSignError, match="missing secret"):
            sign_payload("sha1", PAYLOAD)


class TestConfiguredOptions:
    """Test the active configuration fills options the caller leaves unset"""

    def test_configured_tolerance_with_explicit_options(self):
        """Test a configured tolerance applies when other options are passed"""
        set_config(WebhookConfig(tolerance=15 * 60_000))
        signature = sign_payload(
            "timestampScheme", PAYLOAD, SECRET, options={'currentTimestampOverride': now_ms() - 10 * 60_000}
        )
        event = build_event(PAYLOAD, signature)

        assert verify_event("timestampScheme", event, secret=SECRET) is True
        assert verify_event(
            "timestampScheme", event, secret=SECRET, options={'signatureHeader': DEFAULT_WEBHOOK_SIGNATURE_HEADER}
        ) is True
        assert verify_event(
            "timestampScheme", event, secret=SECRET, options=VerifyOptions(issuer='example.com')
        ) is True

    def test_explicit_tolerance_overrides_configured(self):
        """Test an explicit tolerance wins over the configured one"""
        set_config(WebhookConfig(tolerance=15 * 60_000))
        signature = sign_payload(
            "timestampScheme", PAYLOAD, SECRET, options={'currentTimestampOverride': now_ms() - 10 * 60_000}
        )

        with pytest.raises(WebhookVerificationError, match="timestamp outside tolerance"):
            verify_event(
                "timestampScheme", build_event(PAYLOAD, signature), secret=SECRET, options={'tolerance': 60_000}
            )

    def test_configured_tolerance_for_event_timestamp(self):
        """Test the event timestamp check uses the configured tolerance"""
        set_config(WebhookConfig(tolerance=1_000))
        signature = sign_payload("sha256", PAYLOAD, SECRET)
        options = VerifyOptions(event_timestamp=now_ms() - 60_000)

        with pytest.raises(WebhookVerificationError, match="event timestamp"):
            verify_event("sha256", build_event(PAYLOAD, signature), secret=SECRET, options=options)

    def test_configured_secret_with_explicit_options(self):
        """Test the configured secret applies when other options are passed"""
        set_config(WebhookConfig(default_secret=SECRET))
        signature = sign_payload("sha256", PAYLOAD, SECRET)

        assert verify_signature("sha256", PAYLOAD, signature, options={'tolerance': 1_000}) is True
