"""Network list synchronization.

Reconciles a destination list with a source set of elements taken from
another network list or a local file. Additions are always applied;
removals only when forced.
"""

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from akamai_netlist.client import NetworkListClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListDiff:
    """Difference between a source and a destination set of elements.

    Attributes:
        to_add: Elements in the source but not the destination
        to_remove: Elements in the destination but not the source
    """

    to_add: list[str] = field(default_factory=list)
    to_remove: list[str] = field(default_factory=list)

    @property
    def unchanged(self) -> bool:
        """Whether source and destination already match."""
        return not self.to_add and not self.to_remove


@dataclass
class SyncResult:
    """Result of synchronizing a network list.

    Attributes:
        destination_id: Unique-id of the list that was synchronized
        source: Label of the source (list id or file path)
        to_add: Elements missing from the destination
        to_remove: Elements absent from the source
        added: Number of elements added
        removed: Number of elements removed
        removal_skipped: Removals were found but not applied (no force)
        duration_seconds: Time taken to sync
    """

    destination_id: str
    source: str
    to_add: list[str] = field(default_factory=list)
    to_remove: list[str] = field(default_factory=list)
    added: int = 0
    removed: int = 0
    removal_skipped: bool = False
    duration_seconds: float = 0.0

    @property
    def unchanged(self) -> bool:
        """Whether no difference was found."""
        return not self.to_add and not self.to_remove


def compute_diff(source: Iterable[str], destination: Iterable[str]) -> ListDiff:
    """Compute what must change for destination to match source.

    Args:
        source: Desired elements.
        destination: Current elements.

    Returns:
        Sorted additions (source - destination) and removals
        (destination - source).
    """
    source_set = set(source)
    destination_set = set(destination)
    return ListDiff(
        to_add=sorted(source_set - destination_set),
        to_remove=sorted(destination_set - source_set),
    )


def read_elements_file(path: str | Path) -> list[str]:
    """Read elements from a file, one per line.

    Blank lines and lines starting with ``#`` are ignored.

    Args:
        path: File to read.

    Returns:
        Unique elements in file order.

    Raises:
        FileNotFoundError: If the file doesn't exist.
    """
    path = Path(path)
    if not path.is_file():
        msg = f"Elements file not found: {path}"
        raise FileNotFoundError(msg)

    elements: dict[str, None] = {}
    with path.open(encoding="utf-8") as f:
        for line in f:
            element = line.strip()
            if element and not element.startswith("#"):
                elements[element] = None

    logger.debug("Read %d elements from %s", len(elements), path)
    return list(elements)


class ListSynchronizer:
    """Synchronizes network list elements.

    Example:
        ```python
        synchronizer = ListSynchronizer(client)

        # Mirror another list, removing stale elements too
        result = synchronizer.sync_from_list("123_SRC", "456_DST", force=True)

        # Add elements from a file; removals are only reported
        result = synchronizer.sync_from_file("blocked.txt", "456_DST")
        ```
    """

    def __init__(self, client: NetworkListClient) -> None:
        """Initialize the synchronizer.

        Args:
            client: Network Lists API client.
        """
        self.client = client

    def fetch_elements(self, list_id: str) -> set[str]:
        """Fetch the current elements of a list.

        Args:
            list_id: The list unique-id.

        Returns:
            Set of elements.
        """
        network_list = self.client.get_network_list(list_id, include_elements=True)
        return network_list.element_set

    def sync_from_list(
        self,
        source_id: str,
        destination_id: str,
        force: bool = False,
    ) -> SyncResult:
        """Make a list match the elements of another list.

        Args:
            source_id: Unique-id of the list to copy elements from.
            destination_id: Unique-id of the list to update.
            force: Also remove elements absent from the source.

        Returns:
            SyncResult with details of the operation.
        """
        source_elements = self.fetch_elements(source_id)
        return self.sync_elements(source_elements, destination_id, force, source=source_id)

    def sync_from_file(
        self,
        path: str | Path,
        destination_id: str,
        force: bool = False,
    ) -> SyncResult:
        """Make a list match the elements of a local file.

        Args:
            path: File with one element per line.
            destination_id: Unique-id of the list to update.
            force: Also remove elements absent from the file.

        Returns:
            SyncResult with details of the operation.
        """
        source_elements = read_elements_file(path)
        return self.sync_elements(source_elements, destination_id, force, source=str(path))

    def sync_elements(
        self,
        elements: Iterable[str],
        destination_id: str,
        force: bool = False,
        source: str = "elements",
    ) -> SyncResult:
        """Make a list match the given elements.

        The destination is read fresh. Additions are applied in one append;
        removals one element at a time and only when ``force`` is set. A
        failure stops the sync and propagates; additions already applied
        stay in place.

        Args:
            elements: Desired elements.
            destination_id: Unique-id of the list to update.
            force: Also remove elements absent from ``elements``.
            source: Label of the source for reporting.

        Returns:
            SyncResult with details of the operation.
        """
        start_time = time.time()

        current = self.fetch_elements(destination_id)
        diff = compute_diff(elements, current)
        result = SyncResult(
            destination_id=destination_id,
            source=source,
            to_add=diff.to_add,
            to_remove=diff.to_remove,
        )

        if diff.unchanged:
            logger.info("No changes needed for list %s", destination_id)
            result.duration_seconds = time.time() - start_time
            return result

        if diff.to_add:
            self.client.append_elements(destination_id, diff.to_add)
            result.added = len(diff.to_add)

        if diff.to_remove:
            if force:
                for element in diff.to_remove:
                    self.client.remove_element(destination_id, element)
                    result.removed += 1
            else:
                logger.warning(
                    "Skipping removal of %d elements from list %s (not forced)",
                    len(diff.to_remove),
                    destination_id,
                )
                result.removal_skipped = True

        result.duration_seconds = time.time() - start_time
        logger.info(
            "Synced list %s from %s (+%d, -%d)",
            destination_id,
            source,
            result.added,
            result.removed,
        )
        return result
