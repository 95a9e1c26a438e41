"""
Shared fixtures for webhook SDK tests
"""

import pytest

from webhook_sdk.config import reset_config
from webhook_sdk.constants import DEFAULT_SECRET_ENV_VAR, SIGNATURE_HEADER_ENV_VAR, TOLERANCE_ENV_VAR


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Isolate tests from the process environment and the cached configuration"""
    for name in (DEFAULT_SECRET_ENV_VAR, SIGNATURE_HEADER_ENV_VAR, TOLERANCE_ENV_VAR):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
