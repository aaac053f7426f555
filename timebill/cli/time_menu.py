from __future__ import annotations

from datetime import date

import questionary
from rich.console import Console
from rich.table import Table

from timebill.aggregation import group_entries_by_week, month_total, week_total
from timebill.billing_calendar import BILLING_CUTOFF_DAY, local_today, parse_date, resolve_billing_month
from timebill.constants import format_full_date
from timebill.exceptions import TimebillError
from timebill.models import format_hours
from timebill.models.billing import BillingMonth
from timebill.services.document_service import DocumentService
from timebill.services.download_service import DownloadService
from timebill.services.time_entry_service import TimeEntryService
from timebill.storage.base import StorageBackend
from timebill.storage.factory import document_storage_key

console = Console()


def _ask_billing_month() -> BillingMonth | None:
    default = resolve_billing_month(local_today()).key
    key = questionary.text("Billing month (YYYY-MM):", default=default).ask()
    if not key:
        return None
    try:
        return BillingMonth.parse(key)
    except TimebillError as e:
        console.print(f"[red]{e.message}[/red]")
        return None


def log_hours_menu(entry_service: TimeEntryService, user_id: int) -> None:
    console.print()
    console.print("[bold]Log Hours[/bold]", style="cyan")

    date_str = questionary.text("Date (YYYY-MM-DD):", default=local_today().isoformat()).ask()
    if not date_str:
        console.print("[yellow]Cancelled.[/yellow]")
        return
    try:
        entry_date: date = parse_date(date_str)
    except TimebillError as e:
        console.print(f"[red]{e.message}[/red]")
        return

    existing = entry_service.get_for_date(user_id, entry_date)
    if existing is not None:
        console.print(
            f"  [dim]Existing entry: {format_hours(existing.hours)}h, {existing.description}[/dim]"
        )

    hours = questionary.text(
        "Hours:", default=format_hours(existing.hours) if existing else ""
    ).ask()
    description = questionary.text(
        "Description:", default=existing.description if existing else ""
    ).ask()
    notes = questionary.text("Notes (optional):", default=(existing.notes or "") if existing else "").ask()
    if hours is None or description is None:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    try:
        entry = entry_service.upsert_entry(user_id, entry_date, hours, description, notes)
    except TimebillError as e:
        console.print(f"[red]{e.message}[/red]")
        return
    console.print(
        f"[green bold]Saved {format_hours(entry.hours)}h for {format_full_date(entry.date)}.[/green bold]"
    )


def list_entries_menu(entry_service: TimeEntryService, user_id: int) -> None:
    billing_month = _ask_billing_month()
    if billing_month is None:
        return

    entries = entry_service.list_for_month(user_id, billing_month)
    if not entries:
        console.print(f"[yellow]No entries for {billing_month.label}.[/yellow]")
        return

    weeks = group_entries_by_week(entries)
    table = Table(title=billing_month.label)
    table.add_column("Week", style="dim")
    table.add_column("Date")
    table.add_column("Hours", justify="right")
    table.add_column("Description")

    for week_number in sorted(weeks):
        for entry in sorted(weeks[week_number], key=lambda e: e.date):
            table.add_row(str(week_number), entry.date.isoformat(), format_hours(entry.hours), entry.description)
        table.add_row("", "[bold]Week total[/bold]", f"[bold]{format_hours(week_total(weeks[week_number]))}[/bold]", "")

    console.print()
    console.print(table)
    console.print(f"[bold]Total hours:[/bold] {format_hours(month_total(entries))}")
    console.print()


def delete_entry_menu(entry_service: TimeEntryService, user_id: int) -> None:
    date_str = questionary.text("Date to delete (YYYY-MM-DD):").ask()
    if not date_str:
        return
    try:
        entry = entry_service.get_for_date(user_id, date_str)
    except TimebillError as e:
        console.print(f"[red]{e.message}[/red]")
        return
    if entry is None:
        console.print("[yellow]No entry on that date.[/yellow]")
        return

    confirm = questionary.confirm(
        f"Delete {format_hours(entry.hours)}h on {format_full_date(entry.date)}?", default=False
    ).ask()
    if not confirm:
        return
    entry_service.delete_entry(user_id, entry.uuid)
    console.print("[green]Entry deleted.[/green]")


def export_documents_menu(
    document_service: DocumentService,
    download_service: DownloadService,
    storage: StorageBackend,
    user_id: int,
) -> None:
    billing_month = _ask_billing_month()
    if billing_month is None:
        return

    try:
        documents = document_service.generate_all(user_id, billing_month)
    except TimebillError as e:
        console.print(f"[red]{e.message}[/red]")
        return

    for document in documents:
        path = storage.save(document_storage_key(billing_month.key, document.filename), document.content)
        console.print(f"  [green]{document.filename}[/green] -> {path}")

    download_service.mark_downloaded(user_id, billing_month.key)
    console.print(f"[green bold]Documents for {billing_month.label} exported.[/green bold]")


def status_menu(download_service: DownloadService, user_id: int) -> None:
    today = local_today()
    reminder = download_service.reminder(user_id, today)
    console.print()
    console.print(f"[bold]Billing month:[/bold] {reminder.billing_month_label}")
    console.print(f"[bold]Downloaded:[/bold] {'yes' if reminder.downloaded else 'no'}")
    if reminder.show_reminder:
        if today.day < BILLING_CUTOFF_DAY:
            message = f"{reminder.billing_month_label} has closed: export its documents."
        else:
            message = f"Month end is here: export the {reminder.billing_month_label} documents."
        console.print(f"[yellow bold]{message}[/yellow bold]")
    console.print()
