"""Pytest configuration for akamai-netlist tests."""

import os
from unittest.mock import MagicMock, patch

import pytest
import requests

from akamai_netlist.client import NetworkListClient
from akamai_netlist.settings import EdgeGridCredentials, reset_settings

# Test constants
TEST_HOST = "akab-test-host.luna.akamaiapis.net"
TEST_CLIENT_TOKEN = "akab-client-token"
TEST_CLIENT_SECRET = "test-client-secret"
TEST_ACCESS_TOKEN = "akab-access-token"
TEST_LIST_ID = "12345_TESTLIST"
TEST_SWITCH_KEY = "1-ABCDE:1-2RBL"

EDGERC_TEMPLATE = """\
[{section}]
host = {host}
client_token = {client_token}
client_secret = {client_secret}
access_token = {access_token}
"""


@pytest.fixture(autouse=True)
def reset_settings_after_test():
    """Reset settings singleton after each test."""
    yield
    reset_settings()


@pytest.fixture
def clean_env():
    """Run with no AKAMAI_* or NETLIST_* variables set."""
    env = {
        key: value
        for key, value in os.environ.items()
        if not key.startswith(("AKAMAI_", "NETLIST_"))
    }
    with patch.dict(os.environ, env, clear=True):
        yield


@pytest.fixture
def mock_env_vars(clean_env):
    """Set EdgeGrid credentials for the default section."""
    with patch.dict(
        os.environ,
        {
            "AKAMAI_HOST": TEST_HOST,
            "AKAMAI_CLIENT_TOKEN": TEST_CLIENT_TOKEN,
            "AKAMAI_CLIENT_SECRET": TEST_CLIENT_SECRET,
            "AKAMAI_ACCESS_TOKEN": TEST_ACCESS_TOKEN,
        },
    ):
        yield


@pytest.fixture
def write_edgerc(tmp_path):
    """Write an edgerc file and return its path."""

    def _write(section: str = "default", host: str = TEST_HOST, name: str = ".edgerc"):
        path = tmp_path / name
        path.write_text(
            EDGERC_TEMPLATE.format(
                section=section,
                host=host,
                client_token=TEST_CLIENT_TOKEN,
                client_secret=TEST_CLIENT_SECRET,
                access_token=TEST_ACCESS_TOKEN,
            )
        )
        return path

    return _write


@pytest.fixture
def credentials():
    """Resolved EdgeGrid credentials."""
    return EdgeGridCredentials(
        host=TEST_HOST,
        client_token=TEST_CLIENT_TOKEN,
        client_secret=TEST_CLIENT_SECRET,
        access_token=TEST_ACCESS_TOKEN,
    )


def _make_response(status_code: int = 200, body=None, headers=None):
    response = MagicMock()
    response.status_code = status_code
    response.headers = headers or {}
    response.content = b"" if body is None else b"{}"
    response.text = "" if body is None else str(body)
    response.json.return_value = body
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Error", response=response
        )
    return response


@pytest.fixture
def make_response():
    """Factory for mock ``requests.Response`` objects."""
    return _make_response


@pytest.fixture
def mock_session():
    """Create a mock requests session."""
    return MagicMock()


@pytest.fixture
def client(credentials, mock_session, clean_env):
    """Create a client with a mocked session."""
    return NetworkListClient(credentials, session=mock_session)


@pytest.fixture
def sample_network_list():
    """Sample network list payload from the API."""
    return {
        "uniqueId": TEST_LIST_ID,
        "name": "test-list",
        "type": "IP",
        "description": "Test list",
        "elementCount": 2,
        "list": ["192.168.1.1", "10.0.0.0/8"],
        "syncPoint": 3,
        "readOnly": False,
        "shared": False,
    }


@pytest.fixture
def sample_geo_list():
    """Sample GEO network list payload from the API."""
    return {
        "uniqueId": "67890_GEOLIST",
        "name": "geo-list",
        "type": "GEO",
        "elementCount": 2,
        "syncPoint": 1,
    }


@pytest.fixture
def sample_activation_status():
    """Sample activation status payload."""
    return {
        "activationId": 98765,
        "activationComments": "activated via akamai-netlist",
        "activationStatus": "PENDING_ACTIVATION",
        "syncPoint": 3,
        "uniqueId": TEST_LIST_ID,
        "fast": False,
        "dispatchCount": 1,
    }
