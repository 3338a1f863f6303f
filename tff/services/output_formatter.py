"""Text rendering for the CLI.

Every method returns a string; printing is the caller's job.  Tables are
left-aligned columns separated by two spaces with a dashed rule under the
header.  JSON output is indented by two spaces and keeps non-ASCII text.
"""

from __future__ import annotations

import json
from typing import Any, Callable

from tff.models.activity import Comment, Revision
from tff.models.dictionary import Categorization, FlatCategory, Ontology
from tff.models.resource import Resource, SearchResult
from tff.services.endpoints import ResourceKind

MAX_LISTED_DATES = 10

Column = tuple[str, Callable[[Resource], str]]


def truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    if max_len <= 3:
        return text[:max_len]
    return text[: max_len - 3] + "..."


def yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def dump_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def render_table(headers: list[str], rows: list[list[str]]) -> str:
    widths = [len(header) for header in headers]
    for row in rows:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], len(cell))

    def line(cells: list[str]) -> str:
        return "  ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()

    rule = ["-" * len(header) for header in headers]
    return "\n".join([line(headers), line(rule), *(line(row) for row in rows)])


def _route_type(resource: Resource) -> str:
    return resource.physical.route_type if resource.physical else ""


def _route_distance(resource: Resource) -> str:
    return resource.physical.distance if resource.physical else ""


_ID: Column = ("ID", lambda r: r.id)
_TITLE: Column = ("TITLE", lambda r: truncate(r.title, 40))
_CITY: Column = ("CITY", lambda r: truncate(r.city, 20))
_STATUS: Column = ("STATUS", lambda r: r.workflow_status)
_PUBLISHED: Column = ("PUBLISHED", lambda r: yes_no(r.published))

TABLE_COLUMNS: dict[ResourceKind, list[Column]] = {
    ResourceKind.EVENT: [
        _ID, _TITLE, _CITY, ("DATE", lambda r: r.first_date), _STATUS, _PUBLISHED,
    ],
    ResourceKind.LOCATION: [_ID, _TITLE, _CITY, _STATUS, _PUBLISHED],
    ResourceKind.VENUE: [_ID, _TITLE, _CITY, _STATUS, _PUBLISHED],
    ResourceKind.ROUTE: [
        _ID, _TITLE, ("TYPE", _route_type), ("DISTANCE", _route_distance), _STATUS, _PUBLISHED,
    ],
    ResourceKind.EVENT_GROUP: [_ID, _TITLE, _STATUS, _PUBLISHED],
}


class OutputFormatter:
    """Renders resources and dictionary data as terminal text."""

    def format_page(self, kind: ResourceKind, page: SearchResult) -> str:
        """Table of one list page plus a ``Showing N of H`` footer."""
        resources = page.resources()
        if not resources:
            return f"No {kind.plural} found."

        columns = TABLE_COLUMNS[kind]
        table = render_table(
            [header for header, _ in columns],
            [[cell(resource) for _, cell in columns] for resource in resources],
        )
        footer = f"Showing {len(resources)} of {page.hits} {kind.plural} (page {page.page})"
        return f"{table}\n\n{footer}"

    def format_detail(self, resource: Resource, label: str) -> str:
        """Multi-section detail view of a single resource."""
        lines = [f"{label}: {resource.title}", f"ID: {resource.id}"]
        if resource.slug:
            lines.append(f"Slug: {resource.slug}")
        if resource.trc_id:
            lines.append(f"TRC ID: {resource.trc_id}")
        if resource.external_id:
            lines.append(f"External ID: {resource.external_id}")
        lines.append(f"Status: {resource.workflow_status}")
        lines.append(f"Published: {yes_no(resource.published)}")
        if resource.deleted:
            lines.append("Deleted: Yes")
        if resource.owner:
            lines.append(f"Owner: {resource.owner}")
        if resource.user_organisation:
            lines.append(f"Organisation: {resource.user_organisation}")
        if resource.entity_type:
            lines.append(f"Type: {resource.entity_type}")

        if resource.details:
            if len(resource.details) > 1:
                lines += ["", "Titles:"]
                lines += [f"  {d.lang}: {d.title}" for d in resource.details]
            lines += ["", "Short Description:"]
            lines += [
                f"  {d.lang}: {truncate(d.short_description, 200)}"
                for d in resource.details
                if d.short_description
            ]

        lines += self._location_lines(resource)
        lines += self._calendar_lines(resource)
        lines += self._route_lines(resource)
        lines += self._contact_lines(resource)

        if resource.urls:
            lines += ["", "URLs:"]
            lines += [f"  {u.label or u.url_type}: {u.url}" for u in resource.urls]

        if resource.media:
            lines += ["", "Media:"]
            lines += [
                f"  {m.media_type}{' (main)' if m.main else ''}: {m.url}" for m in resource.media
            ]

        if resource.types:
            lines += ["", f"Types: {', '.join(resource.types)}"]

        if resource.keywords:
            lines += ["", "Keywords:"]
            lines += [f"  {k.display}" for k in resource.keywords]

        if resource.markers:
            lines += ["", f"Markers: {', '.join(resource.markers)}"]

        lines.append("")
        if resource.created:
            lines.append(f"Created: {resource.created}")
        if resource.last_updated:
            lines.append(f"Last Updated: {resource.last_updated}")
        return "\n".join(lines).rstrip("\n")

    @staticmethod
    def _location_lines(resource: Resource) -> list[str]:
        if resource.location is None or resource.location.address is None:
            return []
        address = resource.location.address
        lines = ["", "Location:"]
        if address.street:
            street = address.street
            if address.house_nr:
                street += f" {address.house_nr}"
            lines.append(f"  Address: {street}")
        if address.zip_code or address.city:
            lines.append(f"  City: {address.zip_code} {address.city}")
        if address.latitude or address.longitude:
            lines.append(f"  Coordinates: {address.latitude:.6f}, {address.longitude:.6f}")
        return lines

    @staticmethod
    def _calendar_lines(resource: Resource) -> list[str]:
        if resource.calendar is None or not resource.calendar.single_dates:
            return []
        dates = resource.calendar.single_dates
        lines = ["", "Dates:"]
        for entry in dates[:MAX_LISTED_DATES]:
            text = entry.date
            if entry.start_time:
                text += f" {entry.start_time}"
            if entry.end_time:
                text += f" - {entry.end_time}"
            lines.append(f"  {text}")
        if len(dates) > MAX_LISTED_DATES:
            lines.append(f"  ... and {len(dates) - MAX_LISTED_DATES} more dates")
        return lines

    @staticmethod
    def _route_lines(resource: Resource) -> list[str]:
        physical = resource.physical
        if physical is None:
            return []
        lines: list[str] = []
        if physical.route_type:
            lines += ["", f"Route Type: {physical.route_type}"]
        if physical.distance:
            lines.append(f"Distance: {physical.distance}")
        if physical.duration:
            lines.append(f"Duration: {physical.duration}")
        return lines

    @staticmethod
    def _contact_lines(resource: Resource) -> list[str]:
        contact = resource.contact_info
        if contact is None:
            return []
        lines: list[str] = []
        phone, email = contact.get_phone(), contact.get_email()
        if phone or email:
            lines += ["", "Contact:"]
            if phone:
                lines.append(f"  Phone: {phone}")
            if email:
                lines.append(f"  Email: {email}")
        if contact.urls:
            lines += ["", "Contact URLs:"]
            lines += [f"  {u.url_service_type or 'url'}: {u.url}" for u in contact.urls]
        return lines

    def format_comments(self, comments: list[Comment]) -> str:
        if not comments:
            return "No comments."
        return "\n\n".join(f"[{c.created}] {c.author}:\n  {c.text}" for c in comments)

    def format_revisions(self, revisions: list[Revision]) -> str:
        if not revisions:
            return "No revisions."
        return "\n".join(
            f"[{r.created}] {r.author}{f' - {r.comment}' if r.comment else ''}"
            for r in revisions
        )

    def format_ontology(self, ontology: Ontology) -> str:
        """Indented category tree, two spaces per level."""
        lines: list[str] = []
        if ontology.last_modified:
            lines += [f"Last modified: {ontology.last_modified}", ""]
        for node in ontology.categorizations:
            self._tree_lines(node, 0, lines)
        return "\n".join(lines)

    def _tree_lines(self, node: Categorization, depth: int, lines: list[str]) -> None:
        flag = " [DEPRECATED]" if node.deprecated else ""
        lines.append(
            f"{'  ' * depth}{node.cnet_id}  {node.name} (ID: {node.categorization_id or '-'}){flag}"
        )
        for child in node.children:
            self._tree_lines(child, depth + 1, lines)

    def format_categories(self, categories: list[FlatCategory]) -> str:
        if not categories:
            return "No categories found."
        table = render_table(
            ["ID", "CNET_ID", "LABEL", "PARENT"],
            [
                [c.id, c.cnet_id, truncate(c.label, 40), truncate(c.parent, 30)]
                for c in categories
            ],
        )
        return f"{table}\n\nTotal: {len(categories)} categories"
