"""Borrow, return and fine rules on top of the Library registries."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal, InvalidOperation
from typing import Callable, List, Optional, Union

from book import Book
from config import settings
from exceptions import (
    BookNotBorrowedError,
    BookUnavailableError,
    BorrowLimitExceededError,
    InvalidAmountError,
    OutstandingFinesError,
)
from library import Library
from member import Member

logger = logging.getLogger(__name__)

Amount = Union[Decimal, int, float, str]


@dataclass
class ReturnReceipt:
    book: Book
    member: Member
    days_overdue: int
    fine: Decimal
    total_fines: Decimal


@dataclass
class FinePayment:
    member: Member
    amount: Decimal
    previous_balance: Decimal
    new_balance: Decimal


@dataclass
class OverdueEntry:
    book: Book
    member: Member
    days_overdue: int
    projected_fine: Decimal


def to_amount(value: Amount) -> Decimal:
    """Convert user or caller input to Decimal without float artefacts.

    Raises:
        InvalidAmountError: the value is not a finite number
    """
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidAmountError(value) from None
    if not amount.is_finite():
        raise InvalidAmountError(value)
    return amount


class LendingService:
    """Enforces the borrowing rules against a Library.

    Rules:
        (1) A member holds at most ``max_borrowed`` books at a time
        (2) Books are due ``loan_days`` after checkout
        (3) Overdue returns are fined ``daily_fine`` per day
        (4) Members with any unpaid fine cannot borrow
    """

    def __init__(
        self,
        library: Library,
        clock: Callable[[], date] = date.today,
        *,
        loan_days: Optional[int] = None,
        daily_fine: Optional[Amount] = None,
        max_borrowed: Optional[int] = None,
    ) -> None:
        self.library = library
        self.clock = clock
        self.loan_days = settings.loan_days if loan_days is None else loan_days
        self.daily_fine = to_amount(settings.daily_fine if daily_fine is None else daily_fine)
        self.max_borrowed = settings.max_borrowed if max_borrowed is None else max_borrowed

    def borrow_book(self, member_id: str, book_id: str) -> date:
        """Lend a book to a member and return its due date.

        Raises:
            MemberNotFoundError
            BookNotFoundError
            BookUnavailableError
            BorrowLimitExceededError
            OutstandingFinesError
        """
        member = self.library.get_member(member_id)
        book = self.library.get_book(book_id)

        if not book.available:
            logger.warning("Borrow refused, %s already out with %s", book_id, book.borrower_id)
            raise BookUnavailableError(book_id)
        if member.borrowed_count >= self.max_borrowed:
            logger.warning("Borrow refused, %s at limit of %d books", member_id, self.max_borrowed)
            raise BorrowLimitExceededError(member_id, self.max_borrowed)
        if member.fines > 0:
            logger.warning("Borrow refused, %s owes %.2f", member_id, member.fines)
            raise OutstandingFinesError(member_id, member.fines)

        due_date = self.clock() + timedelta(days=self.loan_days)
        book.check_out(member.member_id, due_date)
        member.add_borrowed_book(book.book_id)
        logger.info("Book %s borrowed by %s, due %s", book_id, member_id, due_date)
        return due_date

    def return_book(self, book_id: str) -> ReturnReceipt:
        """Take a book back, charging the borrower for any overdue days.

        Raises:
            BookNotFoundError
            BookNotBorrowedError
        """
        book = self.library.get_book(book_id)
        if book.available:
            raise BookNotBorrowedError(book_id)

        member = self.library.get_member(book.borrower_id)
        days_overdue = max(0, (self.clock() - book.due_date).days)
        fine = Decimal("0")
        if days_overdue > 0:
            fine = days_overdue * self.daily_fine
            member.add_fine(fine)
            logger.info("Book %s returned %d days late, fined %.2f", book_id, days_overdue, fine)

        book.check_in()
        member.remove_borrowed_book(book.book_id)
        logger.info("Book %s returned by %s", book_id, member.member_id)
        return ReturnReceipt(book, member, days_overdue, fine, member.fines)

    def pay_fine(self, member_id: str, amount: Amount) -> FinePayment:
        """Apply a payment; the balance never drops below zero.

        Paying more than owed clears the balance and the excess is dropped.

        Raises:
            MemberNotFoundError
            InvalidAmountError
        """
        member = self.library.get_member(member_id)
        amount = to_amount(amount)
        previous = member.fines
        new_balance = member.pay_fine(amount)
        logger.info("Member %s paid %.2f, balance %.2f -> %.2f", member_id, amount, previous, new_balance)
        return FinePayment(member, amount, previous, new_balance)

    def list_overdue_books(self) -> List[OverdueEntry]:
        """Borrowed books past their due date with the fine they would incur today."""
        today = self.clock()
        overdue = []
        for book in self.library.list_books():
            if book.available or book.due_date >= today:
                continue
            days_overdue = (today - book.due_date).days
            overdue.append(
                OverdueEntry(
                    book=book,
                    member=self.library.get_member(book.borrower_id),
                    days_overdue=days_overdue,
                    projected_fine=days_overdue * self.daily_fine,
                )
            )
        return overdue
