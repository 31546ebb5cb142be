"""Akamai Network Lists command-line client.

Manages IP and GEO network lists through the Network Lists v2 API:
listing, searching, creating and deleting lists, editing elements,
synchronizing lists from another list or a local file, activation and
notification subscriptions.

Example:
    ```python
    from akamai_netlist import ListSynchronizer, NetworkListClient, load_credentials

    client = NetworkListClient(load_credentials(None, "default"))

    # List all GEO lists
    lists = client.list_network_lists(list_type="GEO")

    # Mirror one list into another
    ListSynchronizer(client).sync_from_list("123_SRC", "456_DST", force=True)
    ```
"""

__version__ = "0.1.0"

from akamai_netlist.client import NetworkListClient, filter_by_type
from akamai_netlist.exceptions import (
    CredentialsError,
    NetlistError,
    NetworkListAPIError,
    NetworkListAuthError,
    NetworkListConflictError,
    NetworkListNotFoundError,
    NetworkListRateLimitError,
    NetworkListValidationError,
)
from akamai_netlist.models import (
    ActivationStatus,
    ListType,
    Network,
    NetworkList,
)
from akamai_netlist.settings import (
    EdgeGridCredentials,
    NetlistSettings,
    get_netlist_settings,
    load_credentials,
    reset_settings,
)
from akamai_netlist.sync import ListDiff, ListSynchronizer, SyncResult, compute_diff

__all__ = [
    "ActivationStatus",
    "CredentialsError",
    "EdgeGridCredentials",
    "ListDiff",
    "ListSynchronizer",
    "ListType",
    "NetlistError",
    "NetlistSettings",
    "Network",
    "NetworkList",
    "NetworkListAPIError",
    "NetworkListAuthError",
    "NetworkListClient",
    "NetworkListConflictError",
    "NetworkListNotFoundError",
    "NetworkListRateLimitError",
    "NetworkListValidationError",
    "SyncResult",
    "compute_diff",
    "filter_by_type",
    "get_netlist_settings",
    "load_credentials",
    "reset_settings",
]
