"""Command-line interface for Akamai network lists.

Maps each subcommand onto Network Lists API calls and prints the result.
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from akamai_netlist import __version__
from akamai_netlist.client import NetworkListClient
from akamai_netlist.exceptions import NetlistError, NetworkListNotFoundError
from akamai_netlist.models import ListType, Network
from akamai_netlist.output import OUTPUT_FORMATS, format_sync_result, render
from akamai_netlist.settings import get_netlist_settings, load_credentials
from akamai_netlist.sync import ListSynchronizer, read_elements_file

LOG_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

DEFAULT_CREATE_DESCRIPTION = "created via akamai-netlist"
DEFAULT_ACTIVATION_COMMENTS = "activated via akamai-netlist"


def setup_logging(level: str = "error") -> None:
    """Configure logging for CLI output.

    Args:
        level: One of error, warning, info, debug.
    """
    logging.basicConfig(
        level=LOG_LEVELS[level],
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


class CSVAppendAction(argparse.Action):
    """Collect values given repeatedly and/or comma separated."""

    def __call__(self, parser, namespace, values, option_string=None):
        items = list(getattr(namespace, self.dest, None) or [])
        items.extend(v.strip() for v in values.split(",") if v.strip())
        setattr(namespace, self.dest, items)


def build_client(args: argparse.Namespace) -> NetworkListClient:
    """Resolve credentials and create the API client.

    Args:
        args: Parsed command line arguments.

    Returns:
        Configured client.

    Raises:
        CredentialsError: If credentials cannot be loaded.
    """
    credentials = load_credentials(args.config, args.section)
    return NetworkListClient(
        credentials,
        account_switch_key=args.ask,
        request_debug=args.debug == "debug",
    )


def _print(args: argparse.Namespace, data) -> None:
    print(render(data, args.output))


# =============================================================================
# Command handlers
# =============================================================================


def cmd_get_all(args: argparse.Namespace, client: NetworkListClient) -> int:
    """Print all network lists in the account."""
    lists = client.list_network_lists(
        list_type=args.list_type,
        extended=args.extended,
        include_elements=args.include_elements,
    )
    _print(args, lists)
    return 0


def cmd_get_by_id(args: argparse.Namespace, client: NetworkListClient) -> int:
    """Print a network list by unique-id."""
    network_list = client.get_network_list(
        args.id,
        extended=args.extended,
        include_elements=args.include_elements,
    )
    _print(args, network_list)
    return 0


def cmd_get_by_name(args: argparse.Namespace, client: NetworkListClient) -> int:
    """Print a network list by name."""
    network_list = client.get_network_list_by_name(
        args.name,
        list_type=args.list_type,
        extended=args.extended,
        include_elements=args.include_elements,
    )
    if network_list is None:
        msg = f"Network list '{args.name}' not found"
        raise NetworkListNotFoundError(msg)
    _print(args, network_list)
    return 0


def cmd_search(args: argparse.Namespace, client: NetworkListClient) -> int:
    """Print network lists matching a name or element."""
    lists = client.search_network_lists(
        args.search_pattern,
        list_type=args.list_type,
        extended=args.extended,
    )
    _print(args, lists)
    return 0


def cmd_sync_aka(args: argparse.Namespace, client: NetworkListClient) -> int:
    """Synchronize a list from another list."""
    result = ListSynchronizer(client).sync_from_list(
        args.id_src,
        args.id_dst,
        force=args.force,
    )
    print(format_sync_result(result))
    return 0


def cmd_sync_local(args: argparse.Namespace, client: NetworkListClient) -> int:
    """Synchronize a list from a local file."""
    result = ListSynchronizer(client).sync_from_file(
        args.from_file,
        args.id_dst,
        force=args.force,
    )
    print(format_sync_result(result))
    return 0


def cmd_items_add(args: argparse.Namespace, client: NetworkListClient) -> int:
    """Append elements to a list."""
    if args.from_file is not None:
        elements = read_elements_file(args.from_file)
    else:
        elements = args.items or []
    if not elements:
        msg = "No elements to add"
        raise ValueError(msg)
    network_list = client.append_elements(args.id, elements)
    _print(args, network_list)
    return 0


def cmd_items_remove(args: argparse.Namespace, client: NetworkListClient) -> int:
    """Remove an element from a list."""
    network_list = client.remove_element(args.id, args.element)
    _print(args, network_list)
    return 0


def cmd_create(args: argparse.Namespace, client: NetworkListClient) -> int:
    """Create a network list."""
    network_list = client.create_network_list(
        args.name,
        list_type=args.type,
        description=args.description,
    )
    _print(args, network_list)
    return 0


def cmd_activate_list(args: argparse.Namespace, client: NetworkListClient) -> int:
    """Activate a list on staging or production."""
    status = client.activate_network_list(
        args.id,
        network=Network.from_flag(args.prd),
        comments=args.comments,
        notification_recipients=args.notification_recipients or [],
        fast=args.fast,
    )
    _print(args, status)
    return 0


def cmd_activate_status(args: argparse.Namespace, client: NetworkListClient) -> int:
    """Print the activation status of a list."""
    status = client.get_activation_status(args.id, network=Network.from_flag(args.prd))
    _print(args, status)
    return 0


def cmd_delete(args: argparse.Namespace, client: NetworkListClient) -> int:
    """Delete a network list."""
    client.delete_network_list(args.id)
    print(f"✓ Network list {args.id} deleted")
    return 0


def cmd_notification(args: argparse.Namespace, client: NetworkListClient) -> int:
    """Subscribe or unsubscribe notification recipients."""
    if args.unsubscribe:
        response = client.unsubscribe(args.network_lists_ids, args.notification_recipients)
    else:
        response = client.subscribe(args.network_lists_ids, args.notification_recipients)
    action = "Unsubscribed" if args.unsubscribe else "Subscribed"
    print(
        f"✓ {action} {', '.join(args.notification_recipients)} "
        f"for {', '.join(args.network_lists_ids)}"
    )
    if response:
        _print(args, response)
    return 0


# =============================================================================
# Parser
# =============================================================================


def _add_view_flags(parser: argparse.ArgumentParser, elements: bool = True) -> None:
    parser.add_argument(
        "--extended",
        action="store_true",
        help="Return more verbose data such as creation date and activation status",
    )
    if elements:
        parser.add_argument(
            "--includeElements",
            dest="include_elements",
            action="store_true",
            help="Include the full list of IP or GEO elements",
        )


def _add_list_type(parser: argparse.ArgumentParser, default: str, choices: list[str]) -> None:
    parser.add_argument(
        "--listType",
        dest="list_type",
        type=str.upper,
        choices=choices,
        default=default,
        help=f"Filter by network list type [ {' | '.join(choices)} ] (default: {default})",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Returns:
        Configured parser.
    """
    settings = get_netlist_settings()
    all_types = [t.value for t in ListType]
    concrete_types = [ListType.IP.value, ListType.GEO.value]

    parser = argparse.ArgumentParser(
        description="A CLI to interact with Akamai network lists",
        prog="akamai-netlist",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to edgerc file (default: auto-discover from environment or ~/.edgerc)",
    )
    parser.add_argument(
        "--section",
        default=settings.section,
        help=f"Section of the edgerc file to use (default: {settings.section})",
    )
    parser.add_argument(
        "--ask",
        default=None,
        help="Account switch key",
    )
    parser.add_argument(
        "--debug",
        choices=list(LOG_LEVELS),
        default="error",
        help="Log verbosity; 'debug' also logs every API request and response",
    )
    parser.add_argument(
        "--output",
        choices=OUTPUT_FORMATS,
        default=settings.output_format,
        help=f"Output format (default: {settings.output_format})",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Activate command
    activate_parser = subparsers.add_parser("activate", help="Manage network list activation/status")
    activate_sub = activate_parser.add_subparsers(dest="subcommand", required=True)

    activate_list = activate_sub.add_parser("list", help="Activate network list on given network")
    activate_list.add_argument("--id", required=True, help="List unique-id")
    activate_list.add_argument(
        "--comments",
        default=DEFAULT_ACTIVATION_COMMENTS,
        help="Activation comments",
    )
    activate_list.add_argument(
        "--notificationRecipients",
        dest="notification_recipients",
        action=CSVAppendAction,
        help="Recipients of notification (repeatable or comma separated)",
    )
    activate_list.add_argument("--fast", action="store_true", help="Request fast activation")
    activate_list.add_argument("--prd", action="store_true", help="Activate on production")
    activate_list.set_defaults(func=cmd_activate_list)

    activate_status = activate_sub.add_parser(
        "status", help="Display activation status for given network list"
    )
    activate_status.add_argument("--id", required=True, help="List unique-id")
    activate_status.add_argument("--prd", action="store_true", help="Check production")
    activate_status.set_defaults(func=cmd_activate_status)

    # Create command
    create_parser = subparsers.add_parser("create", help="Create new network list")
    create_parser.add_argument("--name", required=True, help="Name for the new list")
    create_parser.add_argument(
        "--description",
        default=DEFAULT_CREATE_DESCRIPTION,
        help="Description for the new list",
    )
    create_parser.add_argument(
        "--type",
        type=str.upper,
        choices=concrete_types,
        default=ListType.IP.value,
        help="Type of list to create (IP/GEO)",
    )
    create_parser.set_defaults(func=cmd_create)

    # Delete command
    delete_parser = subparsers.add_parser(
        "delete",
        help="Delete network list (requires list to be deactivated on both networks)",
    )
    delete_parser.add_argument("--id", required=True, help="List unique-id to remove")
    delete_parser.set_defaults(func=cmd_delete)

    # Get command
    get_parser = subparsers.add_parser("get", help="List network lists objects")
    get_sub = get_parser.add_subparsers(dest="subcommand", required=True)

    get_all = get_sub.add_parser("all", help="Get all network lists in the account")
    _add_view_flags(get_all)
    _add_list_type(get_all, ListType.ANY.value, all_types)
    get_all.set_defaults(func=cmd_get_all)

    get_by_id = get_sub.add_parser("by-id", help="Get a network list by unique-id")
    get_by_id.add_argument("--id", required=True, help="List unique-id")
    _add_view_flags(get_by_id)
    get_by_id.set_defaults(func=cmd_get_by_id)

    get_by_name = get_sub.add_parser("by-name", help="Get a network list by name")
    get_by_name.add_argument("--name", required=True, help="List name")
    _add_view_flags(get_by_name)
    _add_list_type(get_by_name, ListType.IP.value, concrete_types)
    get_by_name.set_defaults(func=cmd_get_by_name)

    # Items command
    items_parser = subparsers.add_parser("items", help="Manage items in network lists")
    items_sub = items_parser.add_subparsers(dest="subcommand", required=True)

    items_add = items_sub.add_parser("add", help="Add elements to a network list")
    items_add.add_argument("--id", required=True, help="List unique-id")
    source = items_add.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--items",
        action=CSVAppendAction,
        help="Items to be included (comma separated)",
    )
    source.add_argument(
        "--from-file",
        type=Path,
        help="File with items to be included, one per line",
    )
    items_add.set_defaults(func=cmd_items_add)

    items_remove = items_sub.add_parser("remove", help="Remove an element from a network list")
    items_remove.add_argument("--id", required=True, help="List unique-id")
    items_remove.add_argument("--element", required=True, help="Element to be removed")
    items_remove.set_defaults(func=cmd_items_remove)

    # Notification command
    notification_parser = subparsers.add_parser(
        "notification",
        help="Manage network list notification subscriptions (subscribe by default)",
    )
    notification_parser.add_argument(
        "--networkListsIDs",
        dest="network_lists_ids",
        action=CSVAppendAction,
        required=True,
        help="Network list unique-ids (repeatable or comma separated)",
    )
    notification_parser.add_argument(
        "--notificationRecipients",
        dest="notification_recipients",
        action=CSVAppendAction,
        required=True,
        help="Recipients of notification (repeatable or comma separated)",
    )
    notification_parser.add_argument(
        "--unsubscribe",
        action="store_true",
        help="Unsubscribe from notifications",
    )
    notification_parser.set_defaults(func=cmd_notification)

    # Search command
    search_parser = subparsers.add_parser(
        "search",
        help="Find network lists that match a name or network element",
    )
    search_parser.add_argument(
        "--searchPattern",
        dest="search_pattern",
        required=True,
        help="Include network lists that match the search pattern",
    )
    _add_view_flags(search_parser, elements=False)
    _add_list_type(search_parser, ListType.ANY.value, all_types)
    search_parser.set_defaults(func=cmd_search)

    # Sync command
    sync_parser = subparsers.add_parser(
        "sync",
        help="Synchronize items from a source into a destination list (without activation)",
    )
    sync_sub = sync_parser.add_subparsers(dest="subcommand", required=True)

    sync_aka = sync_sub.add_parser("aka", help="Synchronize items from another network list")
    sync_aka.add_argument("--id-src", required=True, help="Source list unique-id")
    sync_aka.add_argument("--id-dst", required=True, help="Destination list unique-id")
    sync_aka.add_argument(
        "--force",
        action="store_true",
        help="Also remove elements missing from the source",
    )
    sync_aka.set_defaults(func=cmd_sync_aka)

    sync_local = sync_sub.add_parser("local", help="Synchronize items from a local file")
    sync_local.add_argument(
        "--from-file",
        type=Path,
        required=True,
        help="File with one element per line",
    )
    sync_local.add_argument("--id-dst", required=True, help="Destination list unique-id")
    sync_local.add_argument(
        "--force",
        action="store_true",
        help="Also remove elements missing from the file",
    )
    sync_local.set_defaults(func=cmd_sync_local)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command line arguments.

    Returns:
        Exit code.
    """
    try:
        parser = build_parser()
    except ValidationError as e:
        print(f"Error: {e}")
        return 1
    args = parser.parse_args(argv)
    setup_logging(args.debug)

    try:
        client = build_client(args)
        return args.func(args, client)
    except NetlistError as e:
        print(f"Error: {e}")
        return 1
    except FileNotFoundError as e:
        print(f"Error: {e}")
        return 1
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    except Exception as e:
        logging.exception("Unexpected error")
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
