from __future__ import annotations

from datetime import date


class Book:
    """A single catalogued copy, either on the shelf or out with a member."""

    def __init__(self, book_id: str, title: str, author: str, isbn: str) -> None:
        self.book_id = book_id
        self.title = title
        self.author = author
        self.isbn = isbn
        self.available = True
        # Both set while borrowed, both None while on the shelf
        self.due_date: date | None = None
        self.borrower_id: str | None = None

    def check_out(self, member_id: str, due_date: date) -> None:
        self.available = False
        self.due_date = due_date
        self.borrower_id = member_id

    def check_in(self) -> None:
        self.available = True
        self.due_date = None
        self.borrower_id = None

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        status = "Yes" if self.available else f"No (Due: {self.due_date.isoformat()})"
        return (
            f"ID: {self.book_id} | Title: {self.title:<25} | Author: {self.author:<20} "
            f"| ISBN: {self.isbn} | Available: {status}"
        )

    def __repr__(self) -> str:
        return f"Book({self.book_id!r}, {self.title!r})"

    def to_dict(self) -> dict:
        return {
            "id": self.book_id,
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "available": self.available,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "borrower_id": self.borrower_id,
        }
