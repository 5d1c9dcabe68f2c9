import logging
import sys
from decimal import Decimal
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from config import settings
from exceptions import InvalidAmountError, LibraryError
from lending import LendingService, to_amount
from library import Library
from ui_helpers import (
    format_money,
    print_books,
    print_members,
    print_overdue,
    print_stats_result,
    set_output_mode,
)

APP_NAME = settings.app_name

console = Console()
logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def build_library() -> Library:
    """Fresh in-memory library; state lives only as long as the process."""
    return Library(seed=settings.seed_sample_data)


# --- Typer CLI application ---
app = typer.Typer(help=APP_NAME)


@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    )
):
    """Global CLI options (e.g. output mode)."""
    configure_logging()
    if output:
        set_output_mode(output)


@app.command("list")
def cli_list():
    """List every book in the catalog."""
    print_books(build_library().list_books(), title="Catalog")


@app.command("available")
def cli_available():
    """List books that can be borrowed right now."""
    print_books(build_library().list_available_books(), title="Available Books",
                empty_message="No books available at the moment.")


@app.command("members")
def cli_members():
    """List registered members."""
    print_members(build_library().list_members())


@app.command("find")
def cli_find(term: str = typer.Argument(..., help="Book id, title or ISBN")):
    """Find a single book by id, title or ISBN."""
    book = build_library().find_book(term)
    if book:
        print("Book Found")
        print(f"ID: {book.book_id}")
        print(f"Title: {book.title}")
        print(f"Author: {book.author}")
        print(f"ISBN: {book.isbn}")
    else:
        print(f"No book matching '{term}'.")


@app.command("find-member")
def cli_find_member(term: str = typer.Argument(..., help="Member id, name or email")):
    """Find a single member by id, name or email."""
    member = build_library().find_member(term)
    if member:
        print("Member Found")
        print(f"ID: {member.member_id}")
        print(f"Name: {member.name}")
        print(f"Email: {member.email}")
        print(f"Phone: {member.phone}")
    else:
        print(f"No member matching '{term}'.")


@app.command("search")
def cli_search(query: str = typer.Argument(..., help="Search query")):
    """Search books by title, author or ISBN fragment."""
    print_books(build_library().search_books(query), title=f"Search Results for '{query}'",
                empty_message="No books found matching your search.")


@app.command("menu")
def cli_menu():
    """Start the interactive menu."""
    run_menu()


# --- Interactive menu actions ---
def list_all_books(lending: LendingService) -> None:
    print_books(lending.library.list_books(), title="All Books",
                empty_message="No books available in the library.", mode="rich")


def list_available_books(lending: LendingService) -> None:
    print_books(lending.library.list_available_books(), title="Available Books",
                empty_message="No books available at the moment.", mode="rich")


def add_book(lending: LendingService) -> None:
    title = Prompt.ask("Enter book title")
    author = Prompt.ask("Enter author")
    isbn = Prompt.ask("Enter ISBN")
    book = lending.library.add_book(title, author, isbn)
    console.print(f"[green]✓ Book added successfully:[/] [bold]{escape(book.title)}[/] ({book.book_id})")


def register_member(lending: LendingService) -> None:
    name = Prompt.ask("Enter member name")
    email = Prompt.ask("Enter email")
    phone = Prompt.ask("Enter phone")
    member = lending.library.register_member(name, email, phone)
    console.print(f"[green]✓ Member registered:[/] [bold]{escape(member.name)}[/] (ID: {member.member_id})")


def borrow_book(lending: LendingService) -> None:
    member_id = Prompt.ask("Enter member ID").strip()
    book_id = Prompt.ask("Enter book ID").strip()
    due_date = lending.borrow_book(member_id, book_id)
    book = lending.library.get_book(book_id)
    member = lending.library.get_member(member_id)
    console.print(Panel.fit(
        f"[bold]Book:[/] {escape(book.title)}\n"
        f"[bold]Borrower:[/] {escape(member.name)}\n"
        f"[bold]Due Date:[/] {due_date.isoformat()}",
        title="✓ Book borrowed",
        border_style="green",
    ))


def return_book(lending: LendingService) -> None:
    book_id = Prompt.ask("Enter book ID to return").strip()
    receipt = lending.return_book(book_id)
    if receipt.fine > 0:
        console.print(f"[yellow]⚠ Book is overdue by {receipt.days_overdue} days![/]")
        console.print(f"[yellow]Fine imposed: {format_money(receipt.fine)}[/]")
    lines = (
        f"[bold]Book:[/] {escape(receipt.book.title)}\n"
        f"[bold]Returned by:[/] {escape(receipt.member.name)}"
    )
    if receipt.fine > 0:
        lines += f"\n[bold]Total fines:[/] {format_money(receipt.total_fines)}"
    console.print(Panel.fit(lines, title="✓ Book returned", border_style="green"))


def search_books(lending: LendingService) -> None:
    query = Prompt.ask("Enter search term (title/author/ISBN)")
    print_books(lending.library.search_books(query), title=f"Search Results for '{query}'",
                empty_message="No books found matching your search.", mode="rich")


def list_overdue_books(lending: LendingService) -> None:
    print_overdue(lending.list_overdue_books(), mode="rich")


def ask_amount(label: str) -> Decimal:
    """Prompt until the answer parses as a number."""
    while True:
        raw = Prompt.ask(label).strip().lstrip("$")
        try:
            return to_amount(raw)
        except InvalidAmountError:
            console.print("[yellow]Invalid amount! Please enter a number.[/]")


def pay_fine(lending: LendingService) -> None:
    member_id = Prompt.ask("Enter member ID").strip()
    # Fail on an unknown member before asking for money
    lending.library.get_member(member_id)
    amount = ask_amount("Enter payment amount ($)")
    payment = lending.pay_fine(member_id, amount)
    console.print(Panel.fit(
        f"[bold]Amount paid:[/] {format_money(payment.amount)}\n"
        f"[bold]Previous fine:[/] {format_money(payment.previous_balance)}\n"
        f"[bold]Remaining fine:[/] {format_money(payment.new_balance)}",
        title="✓ Payment processed",
        border_style="green",
    ))


def list_members(lending: LendingService) -> None:
    print_members(lending.library.list_members(), mode="rich")


def show_statistics(lending: LendingService) -> None:
    print_stats_result(lending.library.get_statistics(), mode="rich")


MENU_ITEMS = [
    ("1", "View all books", "📚", list_all_books),
    ("2", "View available books", "✅", list_available_books),
    ("3", "Add new book", "➕", add_book),
    ("4", "Register new member", "👤", register_member),
    ("5", "Borrow a book", "📤", borrow_book),
    ("6", "Return a book", "📥", return_book),
    ("7", "Search books", "🔎", search_books),
    ("8", "View overdue books", "⏰", list_overdue_books),
    ("9", "Pay fines", "💵", pay_fine),
    ("10", "View all members", "👥", list_members),
    ("11", "Show statistics", "📊", show_statistics),
    ("0", "Exit", "🚪", None),
]
MENU_ACTIONS = {key: action for key, _, _, action in MENU_ITEMS}


def render_menu() -> None:
    table = Table.grid(padding=(0, 2))
    table.add_column(justify="right", style="bold cyan", width=4)
    table.add_column(justify="left", style="white")
    for key, label, icon, _ in MENU_ITEMS:
        table.add_row(f"[reverse]{key}[/]", f"{icon} {label}")

    console.print(Panel(
        table,
        title=APP_NAME,
        border_style="cyan",
        box=box.HEAVY,
        padding=(1, 2),
    ))


def run_menu(lending: Optional[LendingService] = None) -> None:
    """Interactive numbered menu; state lasts until the user exits."""
    configure_logging()
    if lending is None:
        lending = LendingService(build_library())

    while True:
        render_menu()
        choice = Prompt.ask("Enter your choice", choices=list(MENU_ACTIONS), default="1").strip()

        if choice == "0":
            console.print("[green]Thank you for using the Library Management System. Goodbye![/]")
            break

        action = MENU_ACTIONS.get(choice)
        if action is None:
            console.print("[yellow]Invalid choice! Please enter a number between 0-11.[/]")
            continue

        try:
            action(lending)
        except LibraryError as e:
            logger.debug("Menu action %s failed: %s", choice, e)
            console.print(f"[bold red]✗ Error:[/] {escape(str(e))}")
        print()  # blank line between actions


if __name__ == "__main__":
    if len(sys.argv) > 1:
        app()
    else:
        run_menu()
