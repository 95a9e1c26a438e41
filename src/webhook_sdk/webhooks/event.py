"""
Inbound webhook event

A transport-level view of a webhook request: headers, body and whether the
body arrived base64 encoded (as API Gateway / Lambda proxy events do).
"""

import base64
import binascii
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ..exceptions import WebhookVerificationError


def find_header_case_insensitive(headers: Mapping[str, str], target_name: str) -> Optional[str]:
    """Find header with case-insensitive lookup"""
    target_lower = target_name.lower()
    for key, value in headers.items():
        if key.lower() == target_lower:
            return value
    return None


@dataclass
class WebhookEvent:
    """
    Webhook request to verify

    Attributes:
        headers: Request headers (names are stored lower-cased)
        body: Raw request body, possibly base64 encoded
        is_base64_encoded: Whether body is base64 encoded
    """
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None
    is_base64_encoded: bool = False

    def __post_init__(self):
        """Normalize headers after initialization"""
        if self.headers is None:
            self.headers = {}
        if not isinstance(self.headers, Mapping):
            raise ValueError("Headers must be a mapping")
        self.headers = {k.lower(): v for k, v in self.headers.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'WebhookEvent':
        """Build an event from an API Gateway style dictionary"""
        return cls(
            headers=dict(data.get('headers') or {}),
            body=data.get('body'),
            is_base64_encoded=bool(data.get('isBase64Encoded', data.get('is_base64_encoded', False))),
        )

    def get_header(self, name: str) -> Optional[str]:
        """Get a header value by case-insensitive name"""
        return find_header_case_insensitive(self.headers, name)

    def decoded_body(self) -> str:
        """
        Body as text, base64-decoded when the event says so.

        Raises:
            WebhookVerificationError: If a base64 body cannot be decoded
        """
        body = self.body or ''
        if not self.is_base64_encoded:
            return body
        try:
            return base64.b64decode(body).decode('utf-8')
        except (binascii.Error, ValueError) as e:
            raise WebhookVerificationError.with_detail(f"body is not valid base64: {e}") from e
