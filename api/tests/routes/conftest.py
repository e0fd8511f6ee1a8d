"""Route test configuration."""

from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def _disable_rate_limiter():
    """Turn slowapi off so repeated renders in one test module never hit 429."""
    with patch("core.ratelimit.limiter.enabled", False):
        yield
