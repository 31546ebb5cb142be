"""Tests for akamai_netlist client."""

import pytest
import requests

from akamai_netlist.client import API_PREFIX, NetworkListClient, filter_by_type
from akamai_netlist.exceptions import (
    NetworkListAPIError,
    NetworkListAuthError,
    NetworkListConflictError,
    NetworkListNotFoundError,
    NetworkListRateLimitError,
    NetworkListValidationError,
)
from akamai_netlist.models import ListType, Network, NetworkList

BASE_URL = "https://akab-test-host.luna.akamaiapis.net" + API_PREFIX


def _call(mock_session, index: int = -1):
    """Return (method, url, kwargs) of a recorded session.request call."""
    call = mock_session.request.call_args_list[index]
    method, url = call.args
    return method, url, call.kwargs


class TestNetworkListClientInit:
    """Test suite for NetworkListClient initialization."""

    def test_init_signs_session(self, credentials, mock_session, clean_env):
        """Test the session gets an EdgeGrid auth handler."""
        from akamai.edgegrid import EdgeGridAuth

        client = NetworkListClient(credentials, session=mock_session)

        assert isinstance(mock_session.auth, EdgeGridAuth)
        assert client.timeout == 30
        assert client.account_switch_key is None

    def test_init_with_timeout(self, credentials, mock_session):
        """Test explicit timeout overrides settings."""
        client = NetworkListClient(credentials, timeout=5, session=mock_session)

        assert client.timeout == 5


class TestFilterByType:
    """Test suite for list type filtering."""

    @pytest.fixture
    def lists(self, sample_network_list, sample_geo_list):
        return [
            NetworkList.model_validate(sample_network_list),
            NetworkList.model_validate(sample_geo_list),
        ]

    @pytest.mark.unit
    def test_any_returns_union(self, lists):
        """Test ANY keeps both IP and GEO lists."""
        result = filter_by_type(lists, ListType.ANY)

        assert {nl.type for nl in result} == {ListType.IP, ListType.GEO}
        assert len(result) == 2

    @pytest.mark.unit
    def test_ip_only(self, lists):
        """Test IP keeps only IP lists."""
        result = filter_by_type(lists, "IP")

        assert [nl.name for nl in result] == ["test-list"]

    @pytest.mark.unit
    def test_geo_only(self, lists):
        """Test GEO keeps only GEO lists."""
        result = filter_by_type(lists, ListType.GEO)

        assert [nl.name for nl in result] == ["geo-list"]

    @pytest.mark.unit
    def test_invalid_type(self, lists):
        """Test unknown list types are rejected."""
        with pytest.raises(ValueError):
            filter_by_type(lists, "ASN")


class TestNetworkListOperations:
    """Test suite for network list operations."""

    def test_list_network_lists_any(
        self, client, mock_session, make_response, sample_network_list, sample_geo_list
    ):
        """Test listing with ANY omits listType and returns all lists."""
        mock_session.request.return_value = make_response(
            body={"networkLists": [sample_network_list, sample_geo_list]}
        )

        lists = client.list_network_lists()

        method, url, kwargs = _call(mock_session)
        assert method == "GET"
        assert url == f"{BASE_URL}/network-lists"
        assert "listType" not in kwargs["params"]
        assert kwargs["params"]["extended"] == "false"
        assert len(lists) == 2

    def test_list_network_lists_ip(
        self, client, mock_session, make_response, sample_network_list, sample_geo_list
    ):
        """Test listing with IP sends listType and filters the result."""
        mock_session.request.return_value = make_response(
            body={"networkLists": [sample_network_list, sample_geo_list]}
        )

        lists = client.list_network_lists(list_type="IP", extended=True, include_elements=True)

        _, _, kwargs = _call(mock_session)
        assert kwargs["params"]["listType"] == "IP"
        assert kwargs["params"]["extended"] == "true"
        assert kwargs["params"]["includeElements"] == "true"
        assert [nl.unique_id for nl in lists] == ["12345_TESTLIST"]

    def test_list_network_lists_empty(self, client, mock_session, make_response):
        """Test listing when no lists exist."""
        mock_session.request.return_value = make_response(body={"networkLists": []})

        assert client.list_network_lists() == []

    def test_search_network_lists(
        self, client, mock_session, make_response, sample_network_list
    ):
        """Test search passes the pattern."""
        mock_session.request.return_value = make_response(
            body={"networkLists": [sample_network_list]}
        )

        lists = client.search_network_lists("192.168.1.1", list_type="IP")

        _, _, kwargs = _call(mock_session)
        assert kwargs["params"]["search"] == "192.168.1.1"
        assert lists[0].name == "test-list"

    def test_get_network_list(self, client, mock_session, make_response, sample_network_list):
        """Test getting a network list by id."""
        mock_session.request.return_value = make_response(body=sample_network_list)

        network_list = client.get_network_list("12345_TESTLIST", include_elements=True)

        method, url, kwargs = _call(mock_session)
        assert method == "GET"
        assert url == f"{BASE_URL}/network-lists/12345_TESTLIST"
        assert kwargs["params"]["includeElements"] == "true"
        assert network_list.elements == ["192.168.1.1", "10.0.0.0/8"]
        assert network_list.sync_point == 3

    def test_get_network_list_not_found(self, client, mock_session, make_response):
        """Test getting a non-existent list."""
        mock_session.request.return_value = make_response(
            404, body={"title": "Not Found", "detail": "Network list not found", "status": 404}
        )

        with pytest.raises(NetworkListNotFoundError) as exc_info:
            client.get_network_list("nonexistent")

        assert exc_info.value.status == 404
        assert exc_info.value.detail == "Network list not found"

    def test_get_network_list_by_name_found(
        self, client, mock_session, make_response, sample_network_list
    ):
        """Test exact name match among search results."""
        similar = dict(sample_network_list, uniqueId="999_OTHER", name="test-list-old")
        mock_session.request.return_value = make_response(
            body={"networkLists": [similar, sample_network_list]}
        )

        network_list = client.get_network_list_by_name("test-list")

        _, _, kwargs = _call(mock_session)
        assert kwargs["params"]["search"] == "test-list"
        assert kwargs["params"]["listType"] == "IP"
        assert network_list is not None
        assert network_list.unique_id == "12345_TESTLIST"

    def test_get_network_list_by_name_not_found(self, client, mock_session, make_response):
        """Test name lookup when nothing matches exactly."""
        mock_session.request.return_value = make_response(body={"networkLists": []})

        assert client.get_network_list_by_name("nonexistent") is None

    def test_create_network_list(
        self, client, mock_session, make_response, sample_network_list
    ):
        """Test creating a network list."""
        mock_session.request.return_value = make_response(body=sample_network_list)

        network_list = client.create_network_list(
            "test-list",
            list_type="IP",
            description="Test list",
            elements=["192.168.1.1"],
        )

        method, url, kwargs = _call(mock_session)
        assert method == "POST"
        assert url == f"{BASE_URL}/network-lists"
        assert kwargs["json"] == {
            "name": "test-list",
            "type": "IP",
            "description": "Test list",
            "list": ["192.168.1.1"],
        }
        assert network_list.unique_id == "12345_TESTLIST"

    def test_create_network_list_invalid(self, client, mock_session, make_response):
        """Test service validation errors."""
        mock_session.request.return_value = make_response(
            400, body={"title": "Invalid network list", "detail": "Bad element: foo"}
        )

        with pytest.raises(NetworkListValidationError):
            client.create_network_list("bad", elements=["foo"])

    def test_update_network_list(
        self, client, mock_session, make_response, sample_network_list
    ):
        """Test full update sends the sync point."""
        mock_session.request.return_value = make_response(body=sample_network_list)
        network_list = NetworkList.model_validate(sample_network_list)

        client.update_network_list(network_list)

        method, url, kwargs = _call(mock_session)
        assert method == "PUT"
        assert url == f"{BASE_URL}/network-lists/12345_TESTLIST"
        assert kwargs["json"]["syncPoint"] == 3
        assert kwargs["json"]["list"] == ["192.168.1.1", "10.0.0.0/8"]

    def test_update_network_list_omits_server_fields(
        self, client, mock_session, make_response, sample_network_list
    ):
        """Test read-only fields are not sent back on update."""
        payload = {
            **sample_network_list,
            "links": {"self": {"href": "/network-list/v2/network-lists/12345_TESTLIST"}},
            "createDate": "2024-01-01T00:00:00Z",
            "readOnly": False,
            "shared": False,
        }
        mock_session.request.return_value = make_response(body=payload)

        client.update_network_list(NetworkList.model_validate(payload))

        _, _, kwargs = _call(mock_session)
        assert set(kwargs["json"]) <= {"name", "type", "description", "list", "syncPoint"}
        assert {"name", "type", "list", "syncPoint"} <= set(kwargs["json"])

    def test_update_network_list_stale(
        self, client, mock_session, make_response, sample_network_list
    ):
        """Test stale sync point conflicts."""
        mock_session.request.return_value = make_response(
            409, body={"title": "Conflict", "detail": "syncPoint is stale"}
        )

        with pytest.raises(NetworkListConflictError):
            client.update_network_list(NetworkList.model_validate(sample_network_list))

    def test_delete_network_list(self, client, mock_session, make_response):
        """Test deleting a network list."""
        mock_session.request.return_value = make_response(
            body={"status": 200, "uniqueId": "12345_TESTLIST"}
        )

        assert client.delete_network_list("12345_TESTLIST") is True

        method, url, _ = _call(mock_session)
        assert method == "DELETE"
        assert url == f"{BASE_URL}/network-lists/12345_TESTLIST"

    def test_delete_active_network_list(self, client, mock_session, make_response):
        """Test deleting a list that is still active."""
        mock_session.request.return_value = make_response(
            409, body={"title": "Network list is active", "status": 409}
        )

        with pytest.raises(NetworkListConflictError, match="Network list is active"):
            client.delete_network_list("12345_TESTLIST")


class TestElementOperations:
    """Test suite for element operations."""

    def test_append_elements(self, client, mock_session, make_response, sample_network_list):
        """Test appending elements."""
        mock_session.request.return_value = make_response(body=sample_network_list)

        client.append_elements("12345_TESTLIST", ["1.2.3.4", "5.6.7.8"])

        method, url, kwargs = _call(mock_session)
        assert method == "POST"
        assert url == f"{BASE_URL}/network-lists/12345_TESTLIST/append"
        assert kwargs["json"] == {"list": ["1.2.3.4", "5.6.7.8"]}

    def test_add_element(self, client, mock_session, make_response, sample_network_list):
        """Test adding a single element."""
        mock_session.request.return_value = make_response(body=sample_network_list)

        client.add_element("12345_TESTLIST", "1.2.3.4")

        method, url, kwargs = _call(mock_session)
        assert method == "PUT"
        assert url == f"{BASE_URL}/network-lists/12345_TESTLIST/elements"
        assert kwargs["params"] == {"element": "1.2.3.4"}

    def test_remove_element(self, client, mock_session, make_response, sample_network_list):
        """Test removing a single element."""
        mock_session.request.return_value = make_response(body=sample_network_list)

        client.remove_element("12345_TESTLIST", "10.0.0.0/8")

        method, url, kwargs = _call(mock_session)
        assert method == "DELETE"
        assert url == f"{BASE_URL}/network-lists/12345_TESTLIST/elements"
        assert kwargs["params"] == {"element": "10.0.0.0/8"}


class TestActivationOperations:
    """Test suite for activation operations."""

    def test_activate_staging(
        self, client, mock_session, make_response, sample_activation_status
    ):
        """Test activation on staging."""
        mock_session.request.return_value = make_response(body=sample_activation_status)

        status = client.activate_network_list(
            "12345_TESTLIST",
            comments="go",
            notification_recipients=["ops@example.com"],
        )

        method, url, kwargs = _call(mock_session)
        assert method == "POST"
        assert url == f"{BASE_URL}/network-lists/12345_TESTLIST/environments/STAGING/activate"
        assert kwargs["json"] == {
            "comments": "go",
            "notificationRecipients": ["ops@example.com"],
            "fast": False,
        }
        assert status.activation_id == 98765
        assert status.is_pending

    def test_activate_production(
        self, client, mock_session, make_response, sample_activation_status
    ):
        """Test activation on production."""
        mock_session.request.return_value = make_response(body=sample_activation_status)

        client.activate_network_list("12345_TESTLIST", network=Network.PRODUCTION, fast=True)

        _, url, kwargs = _call(mock_session)
        assert url.endswith("/environments/PRODUCTION/activate")
        assert kwargs["json"]["fast"] is True

    def test_get_activation_status(
        self, client, mock_session, make_response, sample_activation_status
    ):
        """Test activation status lookup."""
        body = dict(sample_activation_status, activationStatus="ACTIVE")
        mock_session.request.return_value = make_response(body=body)

        status = client.get_activation_status("12345_TESTLIST", network="PRODUCTION")

        method, url, _ = _call(mock_session)
        assert method == "GET"
        assert url == f"{BASE_URL}/network-lists/12345_TESTLIST/environments/PRODUCTION/status"
        assert status.activation_status == "ACTIVE"
        assert not status.is_pending

    def test_get_activation(self, client, mock_session, make_response, sample_activation_status):
        """Test activation lookup by id."""
        mock_session.request.return_value = make_response(body=sample_activation_status)

        status = client.get_activation(98765)

        _, url, _ = _call(mock_session)
        assert url == f"{BASE_URL}/activations/98765"
        assert status.unique_id == "12345_TESTLIST"


class TestNotificationOperations:
    """Test suite for notification subscriptions."""

    def test_subscribe(self, client, mock_session, make_response):
        """Test subscribing recipients."""
        mock_session.request.return_value = make_response()

        result = client.subscribe(["12345_TESTLIST"], ["ops@example.com"])

        method, url, kwargs = _call(mock_session)
        assert method == "POST"
        assert url == f"{BASE_URL}/notifications/subscribe"
        assert kwargs["json"] == {
            "recipients": ["ops@example.com"],
            "uniqueIds": ["12345_TESTLIST"],
        }
        assert result == {}

    def test_unsubscribe(self, client, mock_session, make_response):
        """Test unsubscribing recipients."""
        mock_session.request.return_value = make_response()

        client.unsubscribe(["12345_TESTLIST"], ["ops@example.com"])

        _, url, _ = _call(mock_session)
        assert url == f"{BASE_URL}/notifications/unsubscribe"


class TestAccountSwitchKey:
    """Test suite for account switching."""

    def test_switch_key_sent_on_every_request(
        self, credentials, mock_session, make_response, sample_network_list, clean_env
    ):
        """Test accountSwitchKey is added to every query."""
        client = NetworkListClient(
            credentials, account_switch_key="1-ABCDE:1-2RBL", session=mock_session
        )
        mock_session.request.return_value = make_response(body=sample_network_list)

        client.get_network_list("12345_TESTLIST")
        client.remove_element("12345_TESTLIST", "1.2.3.4")

        for call in mock_session.request.call_args_list:
            assert call.kwargs["params"]["accountSwitchKey"] == "1-ABCDE:1-2RBL"

    def test_no_switch_key_by_default(
        self, client, mock_session, make_response, sample_network_list
    ):
        """Test accountSwitchKey is omitted when not set."""
        mock_session.request.return_value = make_response(body=sample_network_list)

        client.get_network_list("12345_TESTLIST")

        _, _, kwargs = _call(mock_session)
        assert "accountSwitchKey" not in kwargs["params"]


class TestErrorHandling:
    """Test suite for error handling."""

    @pytest.mark.parametrize(
        ("status", "exc_type"),
        [
            (401, NetworkListAuthError),
            (403, NetworkListAuthError),
            (404, NetworkListNotFoundError),
            (400, NetworkListValidationError),
            (422, NetworkListValidationError),
            (409, NetworkListConflictError),
            (429, NetworkListRateLimitError),
            (500, NetworkListAPIError),
        ],
    )
    def test_status_mapping(self, client, mock_session, make_response, status, exc_type):
        """Test HTTP status codes map to exception classes."""
        mock_session.request.return_value = make_response(
            status, body={"title": "Failure", "status": status}
        )

        with pytest.raises(exc_type) as exc_info:
            client.list_network_lists()

        assert exc_info.value.status == status

    def test_message_is_verbatim(self, client, mock_session, make_response):
        """Test the service problem is surfaced as-is."""
        mock_session.request.return_value = make_response(
            403,
            body={
                "title": "Forbidden",
                "detail": "You do not have access to this resource",
                "instance": "/network-list/v2/network-lists",
            },
        )

        with pytest.raises(NetworkListAuthError) as exc_info:
            client.list_network_lists()

        message = str(exc_info.value)
        assert "Forbidden" in message
        assert "You do not have access to this resource" in message
        assert exc_info.value.instance == "/network-list/v2/network-lists"

    def test_rate_limit_retry_after(self, client, mock_session, make_response):
        """Test Retry-After is captured."""
        mock_session.request.return_value = make_response(
            429, body={"title": "Too Many Requests"}, headers={"Retry-After": "12"}
        )

        with pytest.raises(NetworkListRateLimitError) as exc_info:
            client.list_network_lists()

        assert exc_info.value.retry_after == 12

    def test_connection_error(self, client, mock_session):
        """Test connection failures."""
        mock_session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(NetworkListAPIError, match="Connection error"):
            client.get_network_list("12345_TESTLIST")
