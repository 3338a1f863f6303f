"""Command-line interface for the FeedFactory API.

Usage::

    # Events in Amsterdam this week, as a table
    tff events list --city Amsterdam --date-from 1w

    # One location as raw JSON
    tff locations get 0a1b2c3d --json

    # Export venues with two extra property columns
    tff venues export -o venues.xlsx --export-propertyids 12,34

    # Uitkrant export needs a closed date range
    tff events export -o week.xlsx --format uitkrant --date-from 2026-01-12 --date-to 2026-01-18

    # Selectable categories with English labels
    tff dictionary categories --lang en

    # How to set up the access token
    tff configure
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime
from typing import Any, Callable

import httpx

from tff import __version__
from tff.config.loader import CONFIGURE_TEXT, load_settings
from tff.config.settings import Settings
from tff.interfaces.api_client import IFeedFactoryClient
from tff.models.activity import parse_comments, parse_revisions
from tff.models.filters import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    EventFilterCriteria,
    ExportCriteria,
    ExportFormat,
    FilterCriteria,
    SortField,
    WorkflowStatus,
    parse_geo_center,
)
from tff.providers.feedfactory_client import FeedFactoryClient, decode_json
from tff.services.dictionary_service import DictionaryService, flatten_categories
from tff.services.endpoints import DICTIONARY_TYPES, ResourceKind
from tff.services.output_formatter import OutputFormatter, dump_json
from tff.services.resource_service import ResourceService
from tff.utils.errors import DateFormatError, TffError
from tff.utils.logging import configure_logging, get_logger
from tff.utils.time_expressions import parse_relative_time

Handler = Callable[[argparse.Namespace, IFeedFactoryClient], int]

_PUBLISHED_CHOICES = {"true": True, "false": False}


# ---------------------------------------------------------------------------
# Argument helpers
# ---------------------------------------------------------------------------


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError("must be greater than 0")
    return number


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from exc
    if number < 0:
        raise argparse.ArgumentTypeError("must be 0 or greater")
    return number


def _resolve_time(value: str | None, flag: str) -> datetime | None:
    """Resolve a time expression, naming *flag* in the error."""
    if not value:
        return None
    try:
        return parse_relative_time(value)
    except DateFormatError as exc:
        raise exc.with_source(flag)


def _criteria_from_args(args: argparse.Namespace, kind: ResourceKind) -> FilterCriteria:
    """Build filter criteria from parsed ``list``/``export`` flags."""
    fields: dict[str, Any] = {
        "search": args.search or None,
        "markers": args.markers or None,
        "keywords": args.keywords,
        "types": args.types,
        "categories": args.categories,
        "workflow_status": args.wfstatus,
        "published": _PUBLISHED_CHOICES.get(args.published) if args.published else None,
        "include_deleted": args.deleted,
        "owner": args.owner or None,
        "user_organisation": args.userorganisation or None,
        "trc_id": args.trcid or None,
        "external_id": args.externalid or None,
        "language": args.lang or None,
        "updated_since": _resolve_time(args.updated_since, "--updated-since"),
        "sort_field": args.sort,
        "sort_ascending": args.asc,
        "page_size": getattr(args, "size", None),
        "page_index": getattr(args, "page", None),
    }
    if kind is not ResourceKind.EVENT:
        return FilterCriteria(**fields)

    return EventFilterCriteria(
        **fields,
        date_from=_resolve_time(args.date_from, "--date-from"),
        date_to=_resolve_time(args.date_to, "--date-to"),
        location_id=args.location_id or None,
        city=args.city or None,
        geo_center=parse_geo_center(args.geo) if args.geo else None,
        geo_radius=args.geo_distance or None,
    )


# ---------------------------------------------------------------------------
# Resource command handlers
# ---------------------------------------------------------------------------


def _handle_list(args: argparse.Namespace, client: IFeedFactoryClient) -> int:
    """List one page of resources as a table or JSON."""
    kind: ResourceKind = args.kind
    service = ResourceService(client, kind)
    page = service.list_page(_criteria_from_args(args, kind))

    if args.json:
        print(dump_json(page.model_dump()))
    else:
        print(OutputFormatter().format_page(kind, page))
    return 0


def _handle_export(args: argparse.Namespace, client: IFeedFactoryClient) -> int:
    """Export matching resources and write the response to a file."""
    kind: ResourceKind = args.kind
    service = ResourceService(client, kind)
    export = ExportCriteria(
        property_column_ids=args.export_propertyids or None,
        format=getattr(args, "format", None) or ExportFormat.EXCEL,
    )
    criteria = _criteria_from_args(args, kind)

    try:
        size = service.export(criteria, export, args.output)
    except OSError as exc:
        raise TffError(f"writing file: {exc}") from exc

    print(f"Exported {kind.plural} to {args.output} ({size} bytes)")
    return 0


def _handle_get(args: argparse.Namespace, client: IFeedFactoryClient) -> int:
    kind: ResourceKind = args.kind
    service = ResourceService(client, kind)
    if args.json:
        print(dump_json(service.get_document(args.id)))
    else:
        resource = service.get(args.id)
        print(OutputFormatter().format_detail(resource, kind.singular.title()))
    return 0


def _confirm(prompt: str) -> bool:
    try:
        answer = input(prompt)
    except EOFError:
        return False
    return answer.strip().lower() == "y"


def _handle_delete(args: argparse.Namespace, client: IFeedFactoryClient) -> int:
    kind: ResourceKind = args.kind
    if not args.force and not _confirm(
        f"Are you sure you want to delete {kind.singular} {args.id}? [y/N] "
    ):
        print("Cancelled.")
        return 0

    ResourceService(client, kind).delete(args.id)
    print(f"{kind.singular.capitalize()} {args.id} deleted.")
    return 0


def _handle_publish(args: argparse.Namespace, client: IFeedFactoryClient) -> int:
    kind: ResourceKind = args.kind
    ResourceService(client, kind).publish(args.id)
    print(f"{kind.singular.capitalize()} {args.id} published.")
    return 0


def _handle_unpublish(args: argparse.Namespace, client: IFeedFactoryClient) -> int:
    kind: ResourceKind = args.kind
    ResourceService(client, kind).unpublish(args.id)
    print(f"{kind.singular.capitalize()} {args.id} unpublished.")
    return 0


def _handle_comments(args: argparse.Namespace, client: IFeedFactoryClient) -> int:
    payload = ResourceService(client, args.kind).comments_payload(args.id)
    comments = None if args.json else parse_comments(payload)
    if comments is None:
        print(dump_json(payload))
    else:
        print(OutputFormatter().format_comments(comments))
    return 0


def _handle_comment(args: argparse.Namespace, client: IFeedFactoryClient) -> int:
    kind: ResourceKind = args.kind
    ResourceService(client, kind).add_comment(args.id, args.message)
    print(f"Comment added to {kind.singular} {args.id}.")
    return 0


def _handle_revisions(args: argparse.Namespace, client: IFeedFactoryClient) -> int:
    payload = ResourceService(client, args.kind).revisions_payload(args.id)
    revisions = None if args.json else parse_revisions(payload)
    if revisions is None:
        print(dump_json(payload))
    else:
        print(OutputFormatter().format_revisions(revisions))
    return 0


# ---------------------------------------------------------------------------
# Dictionary, accounts and configure handlers
# ---------------------------------------------------------------------------


def _handle_keywords(args: argparse.Namespace, client: IFeedFactoryClient) -> int:
    print(dump_json(DictionaryService(client).keywords(args.type)))
    return 0


def _handle_markers(args: argparse.Namespace, client: IFeedFactoryClient) -> int:
    print(dump_json(DictionaryService(client).markers(args.type)))
    return 0


def _handle_ontology(args: argparse.Namespace, client: IFeedFactoryClient) -> int:
    service = DictionaryService(client)
    payload = service.ontology_payload()
    ontology = None if args.json else service.parse_ontology(payload)
    if ontology is None:
        print(dump_json(payload))
    else:
        print(OutputFormatter().format_ontology(ontology))
    return 0


def _handle_categories(args: argparse.Namespace, client: IFeedFactoryClient) -> int:
    """Flatten the ontology into the categories usable in ``--categories``."""
    service = DictionaryService(client)
    payload = service.ontology_payload()
    ontology = service.parse_ontology(payload)
    if ontology is None:
        print(dump_json(payload))
        return 0

    categories = flatten_categories(ontology.categorizations, lang=args.lang)
    if args.json:
        print(dump_json([category.model_dump(by_alias=True) for category in categories]))
    else:
        print(OutputFormatter().format_categories(categories))
    return 0


def _handle_account_me(args: argparse.Namespace, client: IFeedFactoryClient) -> int:
    print(dump_json(decode_json(client.get_account_me())))
    return 0


def _handle_account_list(args: argparse.Namespace, client: IFeedFactoryClient) -> int:
    print(dump_json(decode_json(client.list_accounts())))
    return 0


def _handle_configure(args: argparse.Namespace, client: IFeedFactoryClient | None) -> int:
    print(CONFIGURE_TEXT)
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _add_filter_arguments(
    parser: argparse.ArgumentParser, kind: ResourceKind, export: bool
) -> None:
    """Filter flags shared by ``list`` and ``export``."""
    plural = kind.plural
    parser.add_argument(
        "-s", "--search",
        help="Free-text search. Supports 'tag:<keyword>' and 'marker:<name>'",
    )
    parser.add_argument(
        "--markers", help="Comma-separated markers; prefix with '!' to exclude"
    )
    parser.add_argument("--keywords", help="Comma-separated keywords")
    parser.add_argument("--types", help="Comma-separated type ids")
    parser.add_argument("--categories", help="Comma-separated category ids")
    parser.add_argument(
        "-w", "--wfstatus",
        choices=[status.value for status in WorkflowStatus],
        help="Workflow status",
    )
    parser.add_argument(
        "--published",
        choices=sorted(_PUBLISHED_CHOICES),
        help=f"Only published ('true') or unpublished ('false') {plural}",
    )
    parser.add_argument("--deleted", action="store_true", help="Include deleted items")
    parser.add_argument("--owner", help="Filter by owner")
    parser.add_argument("--userorganisation", help="Filter by user organisation")
    parser.add_argument("--trcid", help="Filter by TRC ID")
    parser.add_argument("--externalid", help="Filter by external ID")
    parser.add_argument("--lang", help="Filter by language (nl, en, de)")
    parser.add_argument(
        "--updated-since",
        help="Items updated after this time. Relative: 2w, 3d, 1mo, 1y. Absolute: 2026-01-15",
    )

    sort_choices = [field.value for field in SortField]
    if export:
        parser.add_argument("--sort", choices=sort_choices, help="Sort field")
    else:
        parser.add_argument(
            "-o", "--sort",
            choices=sort_choices,
            default=SortField.MODIFIED.value,
            help="Sort field (default: modified)",
        )
    parser.add_argument("--asc", action="store_true", help="Sort ascending")

    if not export:
        parser.add_argument(
            "-l", "--size",
            type=_positive_int,
            default=DEFAULT_PAGE_SIZE,
            help=f"Results per page (default: {DEFAULT_PAGE_SIZE}, max: {MAX_PAGE_SIZE})",
        )
        parser.add_argument(
            "-p", "--page",
            type=_non_negative_int,
            default=0,
            help="Page number, starting at 0 (default: 0)",
        )

    if kind is ResourceKind.EVENT:
        parser.add_argument(
            "--date-from", help="Event date range start (YYYY-MM-DD or relative, e.g. 1w)"
        )
        parser.add_argument(
            "--date-to", help="Event date range end (YYYY-MM-DD or relative)"
        )
        parser.add_argument("--location-id", help="Filter by location ID")
        parser.add_argument("--city", help="Filter by city name")
        parser.add_argument("--geo", help="Geographic center as lat,lon (e.g. 52.37,4.89)")
        parser.add_argument(
            "--geo-distance", help="Distance for the geo filter (e.g. 10km). Requires --geo"
        )


def _add_resource_group(
    subparsers: argparse._SubParsersAction, kind: ResourceKind
) -> None:
    """Register ``tff <kind> <command>`` for one resource kind."""
    singular = kind.singular
    group = subparsers.add_parser(kind.value, help=f"Manage {kind.plural}")
    group.set_defaults(handler=None, help_parser=group, kind=kind)
    commands = group.add_subparsers(dest="command", help=f"{kind.plural.capitalize()} commands")

    list_parser = commands.add_parser("list", help=f"List {kind.plural}")
    _add_filter_arguments(list_parser, kind, export=False)
    list_parser.add_argument("-j", "--json", action="store_true", help="Output as JSON")
    list_parser.set_defaults(handler=_handle_list)

    get_parser = commands.add_parser("get", help=f"Show one {singular}")
    get_parser.add_argument("id", help=f"{singular.capitalize()} ID")
    get_parser.add_argument(
        "-j", "--json", action="store_true",
        help="Output the full JSON response instead of formatted text",
    )
    get_parser.set_defaults(handler=_handle_get)

    export_parser = commands.add_parser("export", help=f"Export {kind.plural} to a file")
    export_parser.add_argument("-o", "--output", required=True, help="Output file path")
    export_parser.add_argument(
        "--export-propertyids",
        help="Comma-separated category property ids to add as extra columns",
    )
    if kind is ResourceKind.EVENT:
        export_parser.add_argument(
            "--format",
            choices=[fmt.value for fmt in ExportFormat],
            default=ExportFormat.EXCEL.value,
            help="Export format (default: excel). 'uitkrant' needs --date-from and --date-to",
        )
    _add_filter_arguments(export_parser, kind, export=True)
    export_parser.set_defaults(handler=_handle_export)

    delete_parser = commands.add_parser("delete", help=f"Delete a {singular}")
    delete_parser.add_argument("id", help=f"{singular.capitalize()} ID")
    delete_parser.add_argument(
        "-f", "--force", action="store_true", help="Skip the confirmation prompt"
    )
    delete_parser.set_defaults(handler=_handle_delete)

    for name, handler in (("publish", _handle_publish), ("unpublish", _handle_unpublish)):
        parser = commands.add_parser(name, help=f"{name.capitalize()} a {singular}")
        parser.add_argument("id", help=f"{singular.capitalize()} ID")
        parser.set_defaults(handler=handler)

    comments_parser = commands.add_parser("comments", help=f"List comments on a {singular}")
    comments_parser.add_argument("id", help=f"{singular.capitalize()} ID")
    comments_parser.add_argument("-j", "--json", action="store_true", help="Output as JSON")
    comments_parser.set_defaults(handler=_handle_comments)

    comment_parser = commands.add_parser("comment", help=f"Add a comment to a {singular}")
    comment_parser.add_argument("id", help=f"{singular.capitalize()} ID")
    comment_parser.add_argument("message", help="Comment text")
    comment_parser.set_defaults(handler=_handle_comment)

    revisions_parser = commands.add_parser(
        "revisions", help=f"Show the revision history of a {singular}"
    )
    revisions_parser.add_argument("id", help=f"{singular.capitalize()} ID")
    revisions_parser.add_argument("-j", "--json", action="store_true", help="Output as JSON")
    revisions_parser.set_defaults(handler=_handle_revisions)


def _add_dictionary_group(subparsers: argparse._SubParsersAction) -> None:
    group = subparsers.add_parser(
        "dictionary", help="Keywords, markers and categories configured on the account"
    )
    group.set_defaults(handler=None, help_parser=group)
    commands = group.add_subparsers(dest="command", help="Dictionary commands")

    type_help = f"Resource type: {', '.join(DICTIONARY_TYPES)}"
    keywords_parser = commands.add_parser("keywords", help="List keywords for a resource type")
    keywords_parser.add_argument("type", choices=DICTIONARY_TYPES, help=type_help)
    keywords_parser.set_defaults(handler=_handle_keywords)

    markers_parser = commands.add_parser("markers", help="List markers for a resource type")
    markers_parser.add_argument("type", choices=DICTIONARY_TYPES, help=type_help)
    markers_parser.set_defaults(handler=_handle_markers)

    ontology_parser = commands.add_parser("ontology", help="Show the category tree")
    ontology_parser.add_argument("-j", "--json", action="store_true", help="Output as JSON")
    ontology_parser.set_defaults(handler=_handle_ontology)

    categories_parser = commands.add_parser(
        "categories", help="List categories usable in --categories filters"
    )
    categories_parser.add_argument(
        "--lang", default="nl", help="Language for category labels (default: nl)"
    )
    categories_parser.add_argument("-j", "--json", action="store_true", help="Output as JSON")
    categories_parser.set_defaults(handler=_handle_categories)


def _add_accounts_group(subparsers: argparse._SubParsersAction) -> None:
    group = subparsers.add_parser("accounts", help="Account information")
    group.set_defaults(handler=None, help_parser=group)
    commands = group.add_subparsers(dest="command", help="Accounts commands")

    commands.add_parser("me", help="Show the authenticated user").set_defaults(
        handler=_handle_account_me
    )
    commands.add_parser("list", help="List accounts available to the user").set_defaults(
        handler=_handle_account_list
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for ``tff``."""
    parser = argparse.ArgumentParser(
        prog="tff",
        description="Command-line client for the FeedFactory API.",
    )
    parser.add_argument("-c", "--config", help="Path to a .env config file")
    parser.add_argument(
        "--token", help="API access token (overrides FF_ACCESS_TOKEN and config files)"
    )
    parser.add_argument("--debug", action="store_true", help="Log requests to stderr")
    parser.add_argument("-v", "--version", action="version", version=f"tff {__version__}")
    parser.set_defaults(handler=None, help_parser=parser)

    subparsers = parser.add_subparsers(dest="group", help="Command groups")
    for kind in ResourceKind:
        _add_resource_group(subparsers, kind)
    _add_dictionary_group(subparsers)
    _add_accounts_group(subparsers)

    configure_parser = subparsers.add_parser(
        "configure", help="Show how to configure the access token"
    )
    configure_parser.set_defaults(handler=_handle_configure)

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _build_client(http_client: httpx.Client, settings: Settings) -> IFeedFactoryClient:
    return FeedFactoryClient(
        http_client=http_client,
        token=settings.ff_access_token,
        base_url=settings.ff_base_url,
        timeout=settings.request_timeout,
    )


def run(argv: list[str] | None = None) -> int:
    """Parse *argv*, run the selected command and return the exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.handler is None:
        args.help_parser.print_help()
        return 1

    try:
        if args.handler is _handle_configure:
            return _handle_configure(args, None)

        settings = load_settings(config_file=args.config, token=args.token)
        configure_logging(
            log_level="DEBUG" if args.debug else settings.log_level,
            json_output=settings.app_env == "production",
        )
        get_logger(__name__).debug(
            "command_started", group=args.group, command=getattr(args, "command", None)
        )

        with httpx.Client() as http_client:
            client = _build_client(http_client, settings)
            return args.handler(args, client)
    except TffError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def main() -> None:
    """Console-script entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
