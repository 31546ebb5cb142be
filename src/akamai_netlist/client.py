"""Akamai Network Lists v2 API client.

Uses a ``requests`` session signed by the official EdgeGrid auth plugin.
"""

import logging
from collections.abc import Iterable
from typing import Any
from urllib.parse import urljoin

import requests
from akamai.edgegrid import EdgeGridAuth

from akamai_netlist.exceptions import (
    NetworkListAPIError,
    NetworkListAuthError,
    NetworkListConflictError,
    NetworkListNotFoundError,
    NetworkListRateLimitError,
    NetworkListValidationError,
)
from akamai_netlist.models import (
    ActivationRequest,
    ActivationStatus,
    CreateNetworkListRequest,
    ListType,
    Network,
    NetworkList,
    NotificationSubscription,
)
from akamai_netlist.settings import EdgeGridCredentials, get_netlist_settings

logger = logging.getLogger(__name__)

API_PREFIX = "/network-list/v2"


def filter_by_type(
    network_lists: Iterable[NetworkList],
    list_type: ListType | str,
) -> list[NetworkList]:
    """Filter network lists by type.

    Args:
        network_lists: Lists to filter.
        list_type: IP, GEO or ANY.

    Returns:
        All IP and GEO lists for ANY, otherwise only lists of that type.
    """
    list_type = ListType(list_type)
    if list_type == ListType.ANY:
        return [nl for nl in network_lists if nl.type in (ListType.IP, ListType.GEO)]
    return [nl for nl in network_lists if nl.type == list_type]


class NetworkListClient:
    """Client for Akamai Network Lists API operations.

    Example:
        ```python
        creds = load_credentials(None, "default")
        client = NetworkListClient(creds)

        # List all IP lists
        lists = client.list_network_lists(list_type=ListType.IP)

        # Create a list and add elements
        new_list = client.create_network_list("blocked-ips")
        client.append_elements(new_list.unique_id, ["1.2.3.4", "10.0.0.0/8"])
        ```
    """

    def __init__(
        self,
        credentials: EdgeGridCredentials,
        account_switch_key: str | None = None,
        request_debug: bool = False,
        timeout: int | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the Network Lists client.

        Args:
            credentials: Resolved EdgeGrid credentials.
            account_switch_key: Optional key for acting on another account.
            request_debug: Log every request and response at DEBUG.
            timeout: HTTP timeout in seconds. Defaults to settings.
            session: Optional pre-built session (mainly for tests).
        """
        self.credentials = credentials
        self.account_switch_key = account_switch_key or None
        self.request_debug = request_debug
        self.timeout = timeout or get_netlist_settings().request_timeout
        self._base_url = credentials.base_url

        self._session = session or requests.Session()
        self._session.auth = EdgeGridAuth(
            client_token=credentials.client_token,
            client_secret=credentials.client_secret.get_secret_value(),
            access_token=credentials.access_token.get_secret_value(),
            max_body=credentials.max_body,
        )

        logger.info("Initialized Network Lists client for %s", credentials.host)

    def _handle_api_error(self, error: Exception) -> None:
        """Convert transport exceptions to our custom exceptions.

        Args:
            error: Exception raised by requests.

        Raises:
            NetworkListAuthError: For authentication failures.
            NetworkListRateLimitError: For rate limit errors.
            NetworkListNotFoundError: For missing resources.
            NetworkListValidationError: For invalid requests.
            NetworkListConflictError: For state conflicts.
            NetworkListAPIError: For other API errors.
        """
        if isinstance(error, requests.HTTPError) and error.response is not None:
            response = error.response
            status = response.status_code
            body: dict[str, Any] | str
            try:
                body = response.json()
            except ValueError:
                body = response.text

            problem = body if isinstance(body, dict) else {}
            title = problem.get("title")
            detail = problem.get("detail")
            message = title or detail or (body if isinstance(body, str) and body else str(error))
            kwargs: dict[str, Any] = {
                "status": status,
                "title": title,
                "detail": detail,
                "instance": problem.get("instance"),
                "response": body,
            }

            if status in (401, 403):
                raise NetworkListAuthError(message, **kwargs) from error
            if status == 404:
                raise NetworkListNotFoundError(message, **kwargs) from error
            if status in (400, 422):
                raise NetworkListValidationError(message, **kwargs) from error
            if status == 409:
                raise NetworkListConflictError(message, **kwargs) from error
            if status == 429:
                retry_after = response.headers.get("Retry-After")
                raise NetworkListRateLimitError(
                    message,
                    retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
                    **kwargs,
                ) from error
            raise NetworkListAPIError(message, **kwargs) from error

        if isinstance(error, (requests.ConnectionError, requests.Timeout)):
            msg = f"Connection error: {error}"
            raise NetworkListAPIError(msg) from error

        raise NetworkListAPIError(str(error)) from error

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a signed request and decode the JSON response.

        Args:
            method: HTTP method.
            path: Path below the API prefix.
            params: Query parameters (None values are dropped).
            json: JSON body.

        Returns:
            Decoded JSON body, or None for an empty response.

        Raises:
            NetworkListAPIError: If the request fails.
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}
        if self.account_switch_key:
            query["accountSwitchKey"] = self.account_switch_key
        url = urljoin(self._base_url, API_PREFIX + path)

        if self.request_debug:
            logger.debug("Request: %s %s params=%s body=%s", method, url, query, json)

        try:
            response = self._session.request(
                method,
                url,
                params=query,
                json=json,
                timeout=self.timeout,
            )
            if self.request_debug:
                logger.debug(
                    "Response: %s %s -> %s %s",
                    method,
                    url,
                    response.status_code,
                    response.text,
                )
            response.raise_for_status()
        except requests.RequestException as e:
            self._handle_api_error(e)
            raise  # Unreachable but satisfies type checker

        if not response.content:
            return None
        return response.json()

    # =========================================================================
    # Network List Operations
    # =========================================================================

    def list_network_lists(
        self,
        list_type: ListType | str = ListType.ANY,
        extended: bool = False,
        include_elements: bool = False,
        search: str | None = None,
    ) -> list[NetworkList]:
        """List network lists in the account.

        Args:
            list_type: IP, GEO or ANY.
            extended: Include creation dates and activation status.
            include_elements: Include the elements of each list.
            search: Only lists whose name or elements match.

        Returns:
            List of NetworkList objects.

        Raises:
            NetworkListAPIError: If the API request fails.
        """
        list_type = ListType(list_type)
        params = {
            "listType": list_type.value if list_type != ListType.ANY else None,
            "extended": str(extended).lower(),
            "includeElements": str(include_elements).lower(),
            "search": search,
        }
        body = self._request("GET", "/network-lists", params=params) or {}
        lists = [NetworkList.model_validate(item) for item in body.get("networkLists", [])]
        lists = filter_by_type(lists, list_type)
        logger.debug("Listed %d network lists (type=%s)", len(lists), list_type.value)
        return lists

    def search_network_lists(
        self,
        pattern: str,
        list_type: ListType | str = ListType.ANY,
        extended: bool = False,
    ) -> list[NetworkList]:
        """Find network lists by name or element.

        Args:
            pattern: Search expression (list name or network element).
            list_type: IP, GEO or ANY.
            extended: Include creation dates and activation status.

        Returns:
            Matching NetworkList objects.

        Raises:
            NetworkListAPIError: If the API request fails.
        """
        return self.list_network_lists(
            list_type=list_type,
            extended=extended,
            search=pattern,
        )

    def get_network_list(
        self,
        list_id: str,
        extended: bool = False,
        include_elements: bool = False,
    ) -> NetworkList:
        """Get a network list by unique-id.

        Args:
            list_id: The list unique-id.
            extended: Include creation dates and activation status.
            include_elements: Include the list elements.

        Returns:
            NetworkList object.

        Raises:
            NetworkListNotFoundError: If the list doesn't exist.
            NetworkListAPIError: If the API request fails.
        """
        params = {
            "extended": str(extended).lower(),
            "includeElements": str(include_elements).lower(),
        }
        body = self._request("GET", f"/network-lists/{list_id}", params=params)
        return NetworkList.model_validate(body)

    def get_network_list_by_name(
        self,
        name: str,
        list_type: ListType | str = ListType.IP,
        extended: bool = False,
        include_elements: bool = False,
    ) -> NetworkList | None:
        """Get a network list by exact name.

        Args:
            name: The list name.
            list_type: IP, GEO or ANY.
            extended: Include creation dates and activation status.
            include_elements: Include the list elements.

        Returns:
            NetworkList if found, None otherwise.

        Raises:
            NetworkListAPIError: If the API request fails.
        """
        lists = self.list_network_lists(
            list_type=list_type,
            extended=extended,
            include_elements=include_elements,
            search=name,
        )
        for network_list in lists:
            if network_list.name == name:
                return network_list
        return None

    def create_network_list(
        self,
        name: str,
        list_type: ListType | str = ListType.IP,
        description: str | None = None,
        elements: Iterable[str] = (),
    ) -> NetworkList:
        """Create a new network list.

        Args:
            name: List name.
            list_type: IP or GEO.
            description: Optional description.
            elements: Initial elements.

        Returns:
            The created NetworkList.

        Raises:
            NetworkListValidationError: If the name, type or elements are invalid.
            NetworkListAPIError: If the API request fails.
        """
        request = CreateNetworkListRequest(
            name=name,
            type=ListType(list_type),
            description=description,
            elements=list(elements),
        )
        body = self._request("POST", "/network-lists", json=request.to_api_dict())
        created = NetworkList.model_validate(body)
        logger.info("Created network list '%s' with ID %s", name, created.unique_id)
        return created

    def update_network_list(self, network_list: NetworkList) -> NetworkList:
        """Replace a network list with the given definition.

        The list must carry the sync point it was read with.

        Args:
            network_list: Full list definition.

        Returns:
            The updated NetworkList.

        Raises:
            NetworkListConflictError: If the sync point is stale.
            NetworkListAPIError: If the API request fails.
        """
        body = self._request(
            "PUT",
            f"/network-lists/{network_list.unique_id}",
            json=network_list.to_update_dict(),
        )
        logger.info("Updated network list %s", network_list.unique_id)
        return NetworkList.model_validate(body)

    def delete_network_list(self, list_id: str) -> bool:
        """Delete a network list.

        The list must be deactivated on both networks.

        Args:
            list_id: The list unique-id.

        Returns:
            True if deleted successfully.

        Raises:
            NetworkListNotFoundError: If the list doesn't exist.
            NetworkListAPIError: If the API request fails.
        """
        self._request("DELETE", f"/network-lists/{list_id}")
        logger.info("Deleted network list %s", list_id)
        return True

    # =========================================================================
    # Element Operations
    # =========================================================================

    def append_elements(self, list_id: str, elements: Iterable[str]) -> NetworkList:
        """Append elements to a network list.

        Args:
            list_id: The list unique-id.
            elements: IP/CIDR or country-code elements.

        Returns:
            The updated NetworkList.

        Raises:
            NetworkListAPIError: If the API request fails.
        """
        elements = list(elements)
        body = self._request(
            "POST",
            f"/network-lists/{list_id}/append",
            json={"list": elements},
        )
        logger.info("Appended %d elements to list %s", len(elements), list_id)
        return NetworkList.model_validate(body)

    def add_element(self, list_id: str, element: str) -> NetworkList:
        """Add a single element to a network list.

        Args:
            list_id: The list unique-id.
            element: Element to add.

        Returns:
            The updated NetworkList.

        Raises:
            NetworkListAPIError: If the API request fails.
        """
        body = self._request(
            "PUT",
            f"/network-lists/{list_id}/elements",
            params={"element": element},
        )
        logger.info("Added element %s to list %s", element, list_id)
        return NetworkList.model_validate(body)

    def remove_element(self, list_id: str, element: str) -> NetworkList:
        """Remove a single element from a network list.

        Args:
            list_id: The list unique-id.
            element: Element to remove.

        Returns:
            The updated NetworkList.

        Raises:
            NetworkListNotFoundError: If the list or element doesn't exist.
            NetworkListAPIError: If the API request fails.
        """
        body = self._request(
            "DELETE",
            f"/network-lists/{list_id}/elements",
            params={"element": element},
        )
        logger.info("Removed element %s from list %s", element, list_id)
        return NetworkList.model_validate(body)

    # =========================================================================
    # Activation Operations
    # =========================================================================

    def activate_network_list(
        self,
        list_id: str,
        network: Network | str = Network.STAGING,
        comments: str = "",
        notification_recipients: Iterable[str] = (),
        fast: bool = False,
    ) -> ActivationStatus:
        """Activate a network list on staging or production.

        Args:
            list_id: The list unique-id.
            network: STAGING or PRODUCTION.
            comments: Activation comments.
            notification_recipients: Emails notified on completion.
            fast: Request fast activation.

        Returns:
            ActivationStatus of the submitted request.

        Raises:
            NetworkListAPIError: If the API request fails.
        """
        network = Network(network)
        request = ActivationRequest(
            comments=comments,
            notification_recipients=list(notification_recipients),
            fast=fast,
        )
        body = self._request(
            "POST",
            f"/network-lists/{list_id}/environments/{network.value}/activate",
            json=request.to_api_dict(),
        )
        status = ActivationStatus.model_validate(body)
        logger.info(
            "Requested activation %s of list %s on %s: %s",
            status.activation_id,
            list_id,
            network.value,
            status.activation_status,
        )
        return status

    def get_activation_status(
        self,
        list_id: str,
        network: Network | str = Network.STAGING,
    ) -> ActivationStatus:
        """Get the activation status of a list on a network.

        Args:
            list_id: The list unique-id.
            network: STAGING or PRODUCTION.

        Returns:
            ActivationStatus object.

        Raises:
            NetworkListAPIError: If the API request fails.
        """
        network = Network(network)
        body = self._request(
            "GET",
            f"/network-lists/{list_id}/environments/{network.value}/status",
        )
        return ActivationStatus.model_validate(body)

    def get_activation(self, activation_id: int | str) -> ActivationStatus:
        """Get an activation request by its identifier.

        Args:
            activation_id: Activation identifier.

        Returns:
            ActivationStatus object.

        Raises:
            NetworkListNotFoundError: If the activation doesn't exist.
            NetworkListAPIError: If the API request fails.
        """
        body = self._request("GET", f"/activations/{activation_id}")
        return ActivationStatus.model_validate(body)

    # =========================================================================
    # Notification Operations
    # =========================================================================

    def _notifications(
        self,
        action: str,
        list_ids: Iterable[str],
        recipients: Iterable[str],
    ) -> dict[str, Any]:
        subscription = NotificationSubscription(
            recipients=list(recipients),
            unique_ids=list(list_ids),
        )
        body = self._request(
            "POST",
            f"/notifications/{action}",
            json=subscription.to_api_dict(),
        )
        logger.info(
            "%s %d recipients for %d lists",
            action.capitalize(),
            len(subscription.recipients),
            len(subscription.unique_ids),
        )
        return body or {}

    def subscribe(
        self,
        list_ids: Iterable[str],
        recipients: Iterable[str],
    ) -> dict[str, Any]:
        """Subscribe recipients to change notifications for lists.

        Args:
            list_ids: Network list unique-ids.
            recipients: Email addresses.

        Returns:
            Response body (empty dict when the service returns none).

        Raises:
            NetworkListAPIError: If the API request fails.
        """
        return self._notifications("subscribe", list_ids, recipients)

    def unsubscribe(
        self,
        list_ids: Iterable[str],
        recipients: Iterable[str],
    ) -> dict[str, Any]:
        """Unsubscribe recipients from change notifications for lists.

        Args:
            list_ids: Network list unique-ids.
            recipients: Email addresses.

        Returns:
            Response body (empty dict when the service returns none).

        Raises:
            NetworkListAPIError: If the API request fails.
        """
        return self._notifications("unsubscribe", list_ids, recipients)
