"""
Shared test fixtures and utilities for adcirclive tests.

This module provides:
- Environment isolation (no real asgs-global.conf, no ADCIRCLIVE_* leakage)
- Credentials, fixed-clock signers and mock HTTP sessions
- Temporary config files
- Command contexts writing to in-memory streams
"""

import io
import json
import os
import shutil
import sys
import tempfile

import pytest
from unittest.mock import Mock

# Add src to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from adcirclive.config import ClientConfig, Credentials
from adcirclive.signer import Signer
from adcirclive.transport import Transport


# =============================================================================
# Constants
# =============================================================================

TEST_KEY = "test-key"
TEST_SECRET = "test-secret"
TEST_BASE_URL = "https://tools.example.test"
FIXED_TIME = 1700000000.12345

CATALOG = [
    {"name": "HSOFS", "nodes": "1000", "elements": "500"},
    {"name": "NCSC_SAB_v1.23", "nodes": "1608356", "elements": "3120157"},
]


# =============================================================================
# Helpers
# =============================================================================

def make_http_response(status: int = 200, body=None):
    """Build a stand-in for requests.Response."""
    response = Mock()
    response.status_code = status
    response.ok = status < 400
    if body is None:
        response.text = ""
    elif isinstance(body, str):
        response.text = body
    else:
        response.text = json.dumps(body)
    return response


def make_session(*responses):
    """Mock requests.Session whose request() returns the given responses in order."""
    session = Mock()
    session.request.side_effect = list(responses)
    return session


# =============================================================================
# Fixtures: Environment
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep the developer's real configuration out of every test."""
    for key in ("ADCIRCLIVE_API_KEY", "ADCIRCLIVE_API_SECRET", "ADCIRCLIVE_BASE_URL"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("ADCIRCLIVE_CONFIG", str(tmp_path / "absent-asgs-global.conf"))


@pytest.fixture
def temp_dir():
    """Create a temporary directory that's cleaned up after the test."""
    tmpdir = tempfile.mkdtemp(prefix="adcirclive_test_")
    yield tmpdir
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def config_file(temp_dir):
    """An asgs-global.conf carrying test credentials."""
    path = os.path.join(temp_dir, "asgs-global.conf")
    with open(path, "w") as f:
        f.write(
            "[general]\n"
            "operator = alice\n"
            "\n"
            "[adcirclive]\n"
            f"apikey = {TEST_KEY}\n"
            f"apisecret = {TEST_SECRET}\n"
        )
    return path


# =============================================================================
# Fixtures: Signing and Transport
# =============================================================================

@pytest.fixture
def credentials():
    return Credentials(TEST_KEY, TEST_SECRET)


@pytest.fixture
def fixed_signer(credentials):
    """Signer whose clock always reads FIXED_TIME."""
    return Signer(credentials, clock=lambda: FIXED_TIME)


@pytest.fixture
def client_config(credentials):
    return ClientConfig(credentials=credentials, base_url=TEST_BASE_URL)


@pytest.fixture
def streams():
    return io.StringIO(), io.StringIO()


@pytest.fixture
def make_context(client_config, fixed_signer, streams):
    """
    Factory for a CommandContext whose transport uses a mock session.

    Usage:
        context, session = make_context(make_http_response(200, [...]))
    """
    from adcirclive.commands import CommandContext

    def factory(*responses):
        session = make_session(*responses)
        transport = Transport(fixed_signer, base_url=TEST_BASE_URL, session=session)
        stdout, stderr = streams
        context = CommandContext(
            config=client_config,
            stdout=stdout,
            stderr=stderr,
            transport_factory=lambda config: transport,
        )
        return context, session

    return factory
