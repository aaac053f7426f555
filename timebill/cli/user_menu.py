from __future__ import annotations

import questionary
from rich.console import Console
from rich.table import Table

from timebill.models.user import User
from timebill.services.user_service import UserService

console = Console()


def user_management_menu(user_service: UserService) -> None:
    while True:
        choice = questionary.select(
            "Manage Users",
            choices=[
                "Create User",
                "Change Password",
                "List Users",
                "Back",
            ],
        ).ask()

        if choice is None or choice == "Back":
            break
        elif choice == "Create User":
            _create_user(user_service)
        elif choice == "Change Password":
            _change_password(user_service)
        elif choice == "List Users":
            _list_users(user_service)


def select_user(user_service: UserService) -> User | None:
    users = user_service.list_users()
    if not users:
        console.print("[yellow]No users yet. Create one under Manage Users.[/yellow]")
        return None
    if len(users) == 1:
        return users[0]

    choices = [u.username for u in users] + ["Back"]
    username = questionary.select("User:", choices=choices).ask()
    if username is None or username == "Back":
        return None
    return next(u for u in users if u.username == username)


def _read_new_password(prompt: str) -> str | None:
    password = questionary.password(prompt).ask()
    if not password:
        console.print("[yellow]Cancelled.[/yellow]")
        return None

    confirm = questionary.password("Confirm password:").ask()
    if password != confirm:
        console.print("[red]Passwords do not match.[/red]")
        return None
    return password


def _create_user(user_service: UserService) -> None:
    console.print()
    console.print("[bold]New User[/bold]", style="cyan")

    username = questionary.text("Username:").ask()
    if not username:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    password = _read_new_password("Password:")
    if password is None:
        return

    try:
        user = user_service.create_user(username, password)
    except ValueError as e:
        console.print(f"[red]Could not create user: {e}[/red]")
        return
    console.print(f"[green bold]User '{user.username}' created.[/green bold]")


def _change_password(user_service: UserService) -> None:
    console.print()
    console.print("[bold]Change Password[/bold]", style="cyan")

    user = select_user(user_service)
    if user is None:
        return

    password = _read_new_password("New password:")
    if password is None:
        return

    user_service.change_password(user.username, password)
    console.print(f"[green bold]Password for '{user.username}' changed.[/green bold]")


def _list_users(user_service: UserService) -> None:
    users = user_service.list_users()

    if not users:
        console.print("[yellow]No users yet.[/yellow]")
        return

    table = Table(title="Users")
    table.add_column("#", style="dim")
    table.add_column("Username", style="bold")
    table.add_column("Created")

    for u in users:
        created = u.created_at.strftime("%Y-%m-%d %H:%M") if u.created_at else "-"
        table.add_row(str(u.id), u.username, created)

    console.print()
    console.print(table)
    console.print()
