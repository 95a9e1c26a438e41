"""
Process-wide configuration for the webhook SDK

Holds the fallback secret and default verification settings. The active
configuration is loaded from the environment on first use and can be replaced
at application start-up (or in tests) with set_config().
"""

import json
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from ..constants import (
    DEFAULT_TOLERANCE,
    DEFAULT_WEBHOOK_SIGNATURE_HEADER,
    DEFAULT_SECRET_ENV_VAR,
    SIGNATURE_HEADER_ENV_VAR,
    TOLERANCE_ENV_VAR,
)
from ..exceptions import ConfigurationError


@dataclass(frozen=True)
class WebhookConfig:
    """
    Default settings applied when a caller does not pass them explicitly

    Attributes:
        default_secret: Secret used when a sign/verify call omits one
        signature_header: Header carrying the signature on inbound events
        tolerance: Maximum timestamp difference in milliseconds
    """
    default_secret: str = ""
    signature_header: str = DEFAULT_WEBHOOK_SIGNATURE_HEADER
    tolerance: int = DEFAULT_TOLERANCE

    def __post_init__(self):
        """Validate configuration after initialization"""
        if not isinstance(self.default_secret, str):
            raise ConfigurationError("Default secret must be a string")
        if not self.signature_header:
            raise ConfigurationError("Signature header cannot be empty")
        if not isinstance(self.tolerance, int) or isinstance(self.tolerance, bool) or self.tolerance < 0:
            raise ConfigurationError(f"Invalid tolerance: {self.tolerance!r}")

    def to_verify_options(self, **overrides: Any):
        """Build VerifyOptions seeded with this configuration"""
        from ..verifiers.types import VerifyOptions

        values: Dict[str, Any] = {
            'signature_header': self.signature_header,
            'tolerance': self.tolerance,
            'default_secret': self.default_secret,
        }
        values.update(overrides)
        return VerifyOptions(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration, masking the secret"""
        data = asdict(self)
        if data['default_secret']:
            data['default_secret'] = '***'
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'WebhookConfig':
        """Build configuration from a dictionary of known keys"""
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'WebhookConfig':
        """Build configuration from environment variables"""
        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {'default_secret': env.get(DEFAULT_SECRET_ENV_VAR, "")}

        header = env.get(SIGNATURE_HEADER_ENV_VAR)
        if header:
            values['signature_header'] = header

        tolerance = env.get(TOLERANCE_ENV_VAR)
        if tolerance:
            try:
                values['tolerance'] = int(tolerance)
            except ValueError:
                raise ConfigurationError(f"{TOLERANCE_ENV_VAR} must be an integer, got {tolerance!r}")

        return cls(**values)


_active_config: Optional[WebhookConfig] = None


def get_config() -> WebhookConfig:
    """Get the active configuration, loading it from the environment on first use"""
    global _active_config
    if _active_config is None:
        _active_config = WebhookConfig.from_env()
    return _active_config


def set_config(config: WebhookConfig) -> None:
    """Replace the active configuration"""
    global _active_config
    if not isinstance(config, WebhookConfig):
        raise ConfigurationError("Configuration must be a WebhookConfig")
    _active_config = config


def reset_config() -> None:
    """Forget the active configuration so the next read reloads the environment"""
    global _active_config
    _active_config = None


def get_default_secret() -> str:
    """Fallback secret for calls that do not pass one"""
    return get_config().default_secret


def load_config_from_env(environ: Optional[Mapping[str, str]] = None) -> WebhookConfig:
    """Load configuration from environment variables"""
    return WebhookConfig.from_env(environ)


def load_config_from_json(json_string: str) -> WebhookConfig:
    """Load configuration from a JSON string"""
    try:
        data = json.loads(json_string)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Failed to parse configuration JSON: {e}")
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration JSON must be an object")
    try:
        return WebhookConfig.from_dict(data)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration format: {e}")


def load_config_from_file(file_path: Union[str, Path]) -> WebhookConfig:
    """Load configuration from a JSON file"""
    try:
        with open(Path(file_path), 'r', encoding='utf-8') as f:
            json_string = f.read()
    except OSError as e:
        raise ConfigurationError(f"Failed to read configuration file: {e}")
    return load_config_from_json(json_string)
