import questionary
from rich.console import Console

from timebill.cli.time_menu import (
    delete_entry_menu,
    export_documents_menu,
    list_entries_menu,
    log_hours_menu,
    status_menu,
)
from timebill.cli.user_menu import select_user, user_management_menu
from timebill.repositories.factory import (
    get_download_repository,
    get_time_entry_repository,
    get_user_repository,
)
from timebill.services.document_service import DocumentService
from timebill.services.download_service import DownloadService
from timebill.services.time_entry_service import TimeEntryService
from timebill.services.user_service import UserService
from timebill.storage.factory import get_storage

console = Console()


def _build_services() -> tuple[TimeEntryService, DocumentService, DownloadService, UserService]:
    entry_repo = get_time_entry_repository()
    download_service = DownloadService(get_download_repository())
    return (
        TimeEntryService(entry_repo),
        DocumentService(entry_repo, download_service),
        download_service,
        UserService(get_user_repository()),
    )


def main_menu() -> None:
    entry_service, document_service, download_service, user_service = _build_services()

    console.print()
    console.print("[bold]Time Tracking[/bold]", style="cyan")
    console.print()

    while True:
        choice = questionary.select(
            "Main Menu",
            choices=[
                "Log Hours",
                "List Month Entries",
                "Delete Entry",
                "Export Documents",
                "Billing Status",
                "Manage Users",
                "Quit",
            ],
        ).ask()

        if choice is None or choice == "Quit":
            console.print("[bold]Bye![/bold]")
            break
        elif choice == "Manage Users":
            user_management_menu(user_service)
            continue

        user = select_user(user_service)
        if user is None or user.id is None:
            continue

        if choice == "Log Hours":
            log_hours_menu(entry_service, user.id)
        elif choice == "List Month Entries":
            list_entries_menu(entry_service, user.id)
        elif choice == "Delete Entry":
            delete_entry_menu(entry_service, user.id)
        elif choice == "Export Documents":
            export_documents_menu(document_service, download_service, get_storage(), user.id)
        elif choice == "Billing Status":
            status_menu(download_service, user.id)
