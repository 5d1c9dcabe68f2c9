from __future__ import annotations

from decimal import Decimal
from typing import List


class Member:
    """A registered borrower.

    Borrowed books are tracked by id only; the Library owns the Book objects.
    """

    def __init__(self, member_id: str, name: str, email: str, phone: str) -> None:
        self.member_id = member_id
        self.name = name
        self.email = email
        self.phone = phone
        self.borrowed_book_ids: List[str] = []
        self.fines = Decimal("0")

    @property
    def borrowed_count(self) -> int:
        return len(self.borrowed_book_ids)

    def add_borrowed_book(self, book_id: str) -> None:
        if book_id not in self.borrowed_book_ids:
            self.borrowed_book_ids.append(book_id)

    def remove_borrowed_book(self, book_id: str) -> None:
        if book_id in self.borrowed_book_ids:
            self.borrowed_book_ids.remove(book_id)

    def add_fine(self, amount: Decimal) -> None:
        self.fines += amount

    def pay_fine(self, amount: Decimal) -> Decimal:
        """Apply a payment and return the new balance.

        Any excess over the balance is discarded, never carried as credit.
        """
        self.fines = max(Decimal("0"), self.fines - amount)
        return self.fines

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return (
            f"ID: {self.member_id} | Name: {self.name:<20} | Email: {self.email:<25} "
            f"| Phone: {self.phone} | Books Borrowed: {self.borrowed_count} | Fines: ${self.fines:.2f}"
        )

    def __repr__(self) -> str:
        return f"Member({self.member_id!r}, {self.name!r})"

    def to_dict(self) -> dict:
        return {
            "id": self.member_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "borrowed_book_ids": list(self.borrowed_book_ids),
            "fines": f"{self.fines:.2f}",
        }
