"""
Configuration management for the webhook SDK

This module provides the process-wide defaults (fallback secret, signature
header and tolerance) and loaders for environment, JSON and file sources.
"""

from .webhook_config import (
    WebhookConfig,
    get_config,
    set_config,
    reset_config,
    get_default_secret,
    load_config_from_env,
    load_config_from_json,
    load_config_from_file,
)

__all__ = [
    'WebhookConfig',
    'get_config',
    'set_config',
    'reset_config',
    'get_default_secret',
    'load_config_from_env',
    'load_config_from_json',
    'load_config_from_file',
]
