"""Pydantic models for Akamai Network Lists API payloads.

Type-safe models for network lists, activations and notification
subscriptions. Fields use snake_case in Python and keep the camelCase
names of the API as aliases.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


UPDATE_FIELDS = {"name", "type", "description", "elements", "sync_point"}


class ListType(str, Enum):
    """Types of network lists.

    ``ANY`` is only meaningful as a filter when listing or searching.
    """

    IP = "IP"
    GEO = "GEO"
    ANY = "ANY"


class Network(str, Enum):
    """Akamai activation networks."""

    STAGING = "STAGING"
    PRODUCTION = "PRODUCTION"

    @classmethod
    def from_flag(cls, production: bool) -> "Network":
        """Pick the network selected by a ``--prd`` style flag."""
        return cls.PRODUCTION if production else cls.STAGING


class ActivationState(str, Enum):
    """Activation status values reported by the service."""

    INACTIVE = "INACTIVE"
    ACTIVE = "ACTIVE"
    MODIFIED = "MODIFIED"
    PENDING_ACTIVATION = "PENDING_ACTIVATION"
    FAILED = "FAILED"
    PENDING_DEACTIVATION = "PENDING_DEACTIVATION"


class _APIModel(BaseModel):
    """Base for API models: accepts aliases or field names, keeps unknown keys."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_api_dict(self) -> dict[str, Any]:
        """Convert to API format (camelCase, unset fields dropped).

        Returns:
            Dictionary for API requests and output.
        """
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class NetworkList(_APIModel):
    """An Akamai network list.

    Attributes:
        unique_id: Unique identifier of the list (``uniqueId``)
        name: List name
        type: IP or GEO
        description: Optional description
        element_count: Number of elements
        elements: IP/CIDR or country-code elements (``list``)
        sync_point: Version of the list, required for full updates
        read_only: Whether the list is managed by Akamai
        shared: Whether the list is shared across accounts
        staging_activation_status: Status on staging (extended only)
        production_activation_status: Status on production (extended only)
    """

    unique_id: str = Field(alias="uniqueId", description="Network list unique-id")
    name: str
    type: ListType = ListType.IP
    description: str | None = None
    element_count: int | None = Field(default=None, alias="elementCount")
    elements: list[str] | None = Field(default=None, alias="list")
    sync_point: int | None = Field(default=None, alias="syncPoint")
    read_only: bool | None = Field(default=None, alias="readOnly")
    shared: bool | None = None
    account_id: str | None = Field(default=None, alias="accountId")
    create_date: str | None = Field(default=None, alias="createDate")
    created_by: str | None = Field(default=None, alias="createdBy")
    update_date: str | None = Field(default=None, alias="updateDate")
    updated_by: str | None = Field(default=None, alias="updatedBy")
    staging_activation_status: str | None = Field(
        default=None, alias="stagingActivationStatus"
    )
    production_activation_status: str | None = Field(
        default=None, alias="productionActivationStatus"
    )
    links: dict[str, Any] | None = None

    @property
    def element_set(self) -> set[str]:
        """Elements as a set (empty when not included in the response)."""
        return set(self.elements or [])

    def to_update_dict(self) -> dict[str, Any]:
        """Build the body of a full list update.

        Server-owned fields (links, dates, counts, flags) are left out.

        Returns:
            Dictionary with name, type, description, list and syncPoint.
        """
        return self.model_dump(
            include=UPDATE_FIELDS,
            by_alias=True,
            exclude_none=True,
            mode="json",
        )


class ActivationStatus(_APIModel):
    """Activation status of a network list on one network.

    Attributes:
        activation_id: Identifier of the latest activation request
        activation_comments: Comments given with the activation
        activation_status: Current state on the network
        sync_point: List version that was activated
        unique_id: Network list unique-id
        fast: Whether fast activation was requested
        dispatch_count: Number of dispatches of the activation
    """

    activation_id: int | None = Field(default=None, alias="activationId")
    activation_comments: str | None = Field(default=None, alias="activationComments")
    activation_status: str = Field(alias="activationStatus")
    sync_point: int | None = Field(default=None, alias="syncPoint")
    unique_id: str | None = Field(default=None, alias="uniqueId")
    network: str | None = None
    fast: bool | None = None
    dispatch_count: int | None = Field(default=None, alias="dispatchCount")
    links: dict[str, Any] | None = None

    @property
    def is_pending(self) -> bool:
        """Whether the service is still working on the request."""
        return self.activation_status in {
            ActivationState.PENDING_ACTIVATION.value,
            ActivationState.PENDING_DEACTIVATION.value,
        }


class ActivationRequest(_APIModel):
    """Request body for activating a network list.

    Attributes:
        comments: Activation comments
        notification_recipients: Emails notified when activation finishes
        fast: Request fast activation
    """

    comments: str = Field(default="", description="Activation comments")
    notification_recipients: list[str] = Field(
        default_factory=list,
        alias="notificationRecipients",
        description="Emails notified on completion",
    )
    fast: bool = False


class NotificationSubscription(_APIModel):
    """Request body for (un)subscribing recipients to list change notices.

    Attributes:
        recipients: Email addresses
        unique_ids: Network list unique-ids
    """

    recipients: list[str] = Field(default_factory=list)
    unique_ids: list[str] = Field(default_factory=list, alias="uniqueIds")


class CreateNetworkListRequest(_APIModel):
    """Request to create a new network list.

    Attributes:
        name: List name
        type: IP or GEO
        description: Optional description
        elements: Initial elements (``list``)
    """

    name: str = Field(description="List name")
    type: ListType = Field(default=ListType.IP, description="IP or GEO")
    description: str | None = Field(default=None, description="Optional description")
    elements: list[str] = Field(default_factory=list, alias="list")
