"""
Exception classes for the webhook SDK
"""

from typing import Optional, Union


VERIFICATION_ERROR_MESSAGE = "You don't have access to invoke this function."
VERIFICATION_SIGN_MESSAGE = "Unable to sign payload"


class WebhookError(Exception):
    """Base exception for all webhook SDK errors"""

    default_message = "Webhook error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @classmethod
    def with_detail(cls, detail: Union[str, BaseException]) -> 'WebhookError':
        """Build an error carrying the default message plus a detail or the original error"""
        return cls(f"{cls.default_message}: {detail}")


class WebhookVerificationError(WebhookError):
    """Exception raised when a signature cannot be verified"""
    default_message = VERIFICATION_ERROR_MESSAGE


class WebhookSignError(WebhookError):
    """Exception raised when a payload cannot be signed"""
    default_message = VERIFICATION_SIGN_MESSAGE


class UnsupportedVerifierError(WebhookError, ValueError):
    """Exception raised for an unknown verifier type"""
    default_message = "Unsupported verifier type"


class ConfigurationError(WebhookError):
    """Exception raised for invalid webhook configuration"""
    default_message = "Invalid webhook configuration"
