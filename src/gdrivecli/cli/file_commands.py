"""`gdrive file ...` commands."""

from __future__ import annotations

from typing import Optional

import click

from gdrivecli.manager import describe_path, export_mime_for, require_local_file
from gdrivecli.models import DEFAULT_ORDER_BY, DEFAULT_SEARCH_LIMIT, SearchFilters
from gdrivecli.search import validate_filters
from gdrivecli.util.mime import EXPORT_FORMATS
from gdrivecli.util.size import format_size

from .context import CliContext
from .output import OutputFormatter, handle_errors


@click.group("file")
def file_group() -> None:
    """Manage files in Google Drive."""


@file_group.command("upload")
@click.argument("local_file")
@click.argument("target_path", required=False, default="")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.pass_obj
@handle_errors
def upload(state: CliContext, local_file: str, target_path: str, json_output: bool) -> None:
    """Upload LOCAL_FILE into the Drive folder TARGET_PATH (default: root)."""
    out = OutputFormatter(json_output=json_output)
    require_local_file(local_file)
    manager = state.manager()

    with out.status("Uploading file..."):
        entry = manager.upload(local_file, target_path)

    if out.json_output:
        out.output_json(
            {
                "id": entry.file_id,
                "name": entry.name,
                "size": entry.size,
                "webViewLink": entry.web_view_link,
            }
        )
        return

    out.success("File uploaded successfully")
    out.details(
        "File Details:",
        [
            ("Name", entry.name),
            ("ID", entry.file_id),
            ("Size", format_size(entry.size)),
            ("Link", entry.web_view_link or "N/A"),
        ],
    )


@file_group.command("ls")
@click.argument("drive_path", required=False, default="")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.pass_obj
@handle_errors
def list_files(state: CliContext, drive_path: str, json_output: bool) -> None:
    """List the contents of the Drive folder DRIVE_PATH (default: root)."""
    out = OutputFormatter(json_output=json_output)
    manager = state.manager()

    with out.status("Fetching files..."):
        entries = manager.list_folder(drive_path)

    if out.json_output:
        out.output_json([e.to_dict() for e in entries])
        return

    if not entries:
        out.info("[yellow]No files found[/yellow]")
        return
    out.entries_table(entries, title=f"Files in {describe_path(drive_path)}")


@file_group.command("get")
@click.argument("drive_path")
@click.argument("local_path")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.pass_obj
@handle_errors
def get_file(state: CliContext, drive_path: str, local_path: str, json_output: bool) -> None:
    """Download the Drive file DRIVE_PATH (e.g. "Folder/file.txt") to LOCAL_PATH."""
    out = OutputFormatter(json_output=json_output)
    manager = state.manager()

    with out.status("Downloading file..."):
        result = manager.download_by_path(drive_path, local_path)

    if out.json_output:
        out.output_json(
            {
                "name": result.entry.name,
                "id": result.entry.file_id,
                "localPath": result.local_path,
                "exported": result.exported,
            }
        )
        return

    out.success("File downloaded successfully")
    rows = [("File", result.entry.name), ("Saved to", result.local_path)]
    if result.exported:
        rows.append(("Exported as", result.export_mime_type))
    out.details("Download Complete:", rows)


@file_group.command("export")
@click.argument("file_id")
@click.argument("local_path")
@click.option(
    "--format",
    "export_format",
    help=f"Export format for Google Docs ({', '.join(EXPORT_FORMATS)})",
)
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.pass_obj
@handle_errors
def export_file(
    state: CliContext,
    file_id: str,
    local_path: str,
    export_format: Optional[str],
    json_output: bool,
) -> None:
    """Download or export the Drive file FILE_ID to LOCAL_PATH."""
    out = OutputFormatter(json_output=json_output)
    if export_format is not None:
        export_mime_for(export_format)
    manager = state.manager()

    with out.status("Downloading file..."):
        result = manager.download_by_id(file_id, local_path, export_format)

    for warning in result.warnings:
        out.warning(warning)

    if out.json_output:
        out.output_json(result.to_dict())
        return

    out.success("File downloaded successfully")
    rows = [
        ("File", result.entry.name),
        ("ID", result.entry.file_id),
        ("Saved to", result.local_path),
    ]
    if result.exported:
        rows.append(("Exported as", result.export_mime_type))
    out.details("Download Complete:", rows)


@file_group.command("search")
@click.option("--name", help="Name contains this text")
@click.option("--text", "full_text", help="Full-text content search")
@click.option("--type", "mime_type", help="Type alias (pdf, image, folder, ...) or MIME type")
@click.option("--parent", help="Only items directly inside this folder ID")
@click.option("--after", help="Modified after this date (YYYY-MM-DD or ISO 8601)")
@click.option("--before", help="Modified before this date (YYYY-MM-DD or ISO 8601)")
@click.option("--owner", help="Owner email address")
@click.option("--starred/--no-starred", default=None, help="Filter by starred state")
@click.option("--shared-with-me", is_flag=True, help="Only items shared with me")
@click.option("--trashed", is_flag=True, help="Search the trash instead")
@click.option("--min-size", help="Minimum size (e.g. 500KB, 10MB)")
@click.option("--max-size", help="Maximum size (e.g. 1GB)")
@click.option(
    "--limit",
    "-l",
    type=click.IntRange(min=1),
    default=DEFAULT_SEARCH_LIMIT,
    show_default=True,
    help="Maximum number of results",
)
@click.option("--order-by", default=DEFAULT_ORDER_BY, show_default=True, help="Sort order")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.pass_obj
@handle_errors
def search_files(
    state: CliContext,
    name: Optional[str],
    full_text: Optional[str],
    mime_type: Optional[str],
    parent: Optional[str],
    after: Optional[str],
    before: Optional[str],
    owner: Optional[str],
    starred: Optional[bool],
    shared_with_me: Optional[bool],
    trashed: bool,
    min_size: Optional[str],
    max_size: Optional[str],
    limit: int,
    order_by: str,
    json_output: bool,
) -> None:
    """Search Drive with filters."""
    out = OutputFormatter(json_output=json_output)
    filters = SearchFilters(
        name=name,
        full_text=full_text,
        mime_type=mime_type,
        parent=parent,
        after=after,
        before=before,
        owner=owner,
        starred=starred,
        shared_with_me=shared_with_me or None,
        trashed=trashed,
        min_size=min_size,
        max_size=max_size,
        limit=limit,
        order_by=order_by,
    )
    validate_filters(filters)
    manager = state.manager()

    with out.status("Searching..."):
        entries = manager.search(filters)

    if out.json_output:
        out.output_json([e.to_dict() for e in entries])
        return

    if not entries:
        out.info("[yellow]No files found[/yellow]")
        return
    out.entries_table(entries, title="Search results")
