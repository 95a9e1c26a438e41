"""
Shared constants for webhook signing and verification
"""

# Maximum allowed clock difference, in milliseconds (5 minutes)
DEFAULT_TOLERANCE = 5 * 60 * 1000

DEFAULT_WEBHOOK_SIGNATURE_HEADER = "RW-WEBHOOK-SIGNATURE"

# Environment variables read by the process-wide configuration
DEFAULT_SECRET_ENV_VAR = "WEBHOOK_SECRET"
SIGNATURE_HEADER_ENV_VAR = "WEBHOOK_SIGNATURE_HEADER"
TOLERANCE_ENV_VAR = "WEBHOOK_TOLERANCE_MS"
