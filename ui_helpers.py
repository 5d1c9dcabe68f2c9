import json
import os
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from config import settings

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"
OUTPUT_MODES = {"plain", "json", "rich"}

_console = Console()


def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in OUTPUT_MODES:
        os.environ[OUTPUT_MODE_ENV] = mode


def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, settings.output_mode).lower()


def format_money(amount) -> str:
    return f"${amount:.2f}"


def _book_status(book) -> str:
    if book.available:
        return "Yes"
    return f"No (Due: {book.due_date.isoformat()})"


def print_books(books: List[Any], title: str = "Books", empty_message: str = "No books in library.",
                mode: Optional[str] = None) -> None:
    """Print a list of books in the current output mode.
    - plain: one 'ID: ... | Title: ...' line per book plus a total line
    - json: JSON array of Book.to_dict()
    - rich: Rich table
    """
    mode = mode or get_output_mode()

    if mode == "json":
        print(json.dumps([b.to_dict() for b in books], ensure_ascii=False))
        return

    if not books:
        print(empty_message)
        return

    if mode == "rich":
        table = Table(title=f"📚 {escape(title)}", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("ISBN", style="white", no_wrap=True)
        table.add_column("Available", style="white")
        for b in books:
            table.add_row(b.book_id, escape(b.title), escape(b.author), escape(b.isbn), _book_status(b))
        _console.print(table)
        _console.print(f"[dim]Total Books: {len(books)}[/]")
    else:
        for b in books:
            print(str(b))
        print(f"Total Books: {len(books)}")


def print_members(members: List[Any], mode: Optional[str] = None) -> None:
    mode = mode or get_output_mode()

    if mode == "json":
        print(json.dumps([m.to_dict() for m in members], ensure_ascii=False))
        return

    if not members:
        print("No members registered.")
        return

    if mode == "rich":
        table = Table(title="👥 Members", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True)
        table.add_column("Name", style="white")
        table.add_column("Email", style="white")
        table.add_column("Phone", style="white")
        table.add_column("Borrowed", justify="right")
        table.add_column("Fines", justify="right")
        for m in members:
            table.add_row(m.member_id, escape(m.name), escape(m.email), escape(m.phone),
                          str(m.borrowed_count), format_money(m.fines))
        _console.print(table)
        _console.print(f"[dim]Total Members: {len(members)}[/]")
    else:
        for m in members:
            print(str(m))
        print(f"Total Members: {len(members)}")


def print_overdue(entries: List[Any], mode: Optional[str] = None) -> None:
    """Print overdue entries; fines shown are projections, not yet charged."""
    mode = mode or get_output_mode()

    if mode == "json":
        payload = [
            {
                "book_id": e.book.book_id,
                "title": e.book.title,
                "member_id": e.member.member_id,
                "borrower": e.member.name,
                "due_date": e.book.due_date.isoformat(),
                "days_overdue": e.days_overdue,
                "projected_fine": f"{e.projected_fine:.2f}",
            }
            for e in entries
        ]
        print(json.dumps(payload, ensure_ascii=False))
        return

    if not entries:
        print("No overdue books at the moment.")
        return

    if mode == "rich":
        table = Table(title="⏰ Overdue Books", show_lines=True, header_style="bold red")
        table.add_column("Book", style="white")
        table.add_column("Borrower", style="white")
        table.add_column("Due Date", no_wrap=True)
        table.add_column("Days Overdue", justify="right")
        table.add_column("Fine", justify="right", style="red")
        for e in entries:
            table.add_row(escape(e.book.title), escape(e.member.name), e.book.due_date.isoformat(),
                          str(e.days_overdue), format_money(e.projected_fine))
        _console.print(table)
    else:
        for e in entries:
            print(f"Book: {e.book.title}")
            print(f"  Borrower: {e.member.name}")
            print(f"  Due Date: {e.book.due_date.isoformat()}")
            print(f"  Days Overdue: {e.days_overdue}")
            print(f"  Fine Amount: {format_money(e.projected_fine)}")


def print_stats_result(stats: Dict[str, Any], mode: Optional[str] = None) -> None:
    mode = mode or get_output_mode()

    if not stats:
        print("No statistics available.")
        return

    if mode == "json":
        payload = dict(stats)
        payload["outstanding_fines"] = f"{stats.get('outstanding_fines', 0):.2f}"
        print(json.dumps(payload, ensure_ascii=False))
    elif mode == "rich":
        content = (
            f"[bold]Total Books:[/] {stats.get('total_books', 0)}\n"
            f"[bold]Available:[/] {stats.get('available_books', 0)}\n"
            f"[bold]Borrowed:[/] {stats.get('borrowed_books', 0)}\n"
            f"[bold]Members:[/] {stats.get('total_members', 0)}\n"
            f"[bold]Outstanding Fines:[/] {format_money(stats.get('outstanding_fines', 0))}"
        )
        _console.print(Panel.fit(content, title="📊 Stats", border_style="blue"))
    else:
        print(f"Total Books: {stats.get('total_books', 0)}")
        print(f"Available Books: {stats.get('available_books', 0)}")
        print(f"Borrowed Books: {stats.get('borrowed_books', 0)}")
        print(f"Total Members: {stats.get('total_members', 0)}")
        print(f"Outstanding Fines: {format_money(stats.get('outstanding_fines', 0))}")
