class LibraryError(Exception):
    """Base class for recoverable catalog and lending errors."""


class MemberNotFoundError(LibraryError, LookupError):
    """No member is registered under the given id."""

    def __init__(self, member_id: str) -> None:
        self.member_id = member_id
        super().__init__(f"Member not found: {member_id}")


class BookNotFoundError(LibraryError, LookupError):
    """No book is catalogued under the given id."""

    def __init__(self, book_id: str) -> None:
        self.book_id = book_id
        super().__init__(f"Book not found: {book_id}")


class BookUnavailableError(LibraryError):
    """The book is already out with another borrower."""

    def __init__(self, book_id: str) -> None:
        self.book_id = book_id
        super().__init__(f"Book {book_id} is already borrowed.")


class BookNotBorrowedError(LibraryError):
    """A return was attempted for a book that is on the shelf."""

    def __init__(self, book_id: str) -> None:
        self.book_id = book_id
        super().__init__(f"Book {book_id} is not currently borrowed.")


class BorrowLimitExceededError(LibraryError):
    def __init__(self, member_id: str, limit: int) -> None:
        self.member_id = member_id
        self.limit = limit
        super().__init__(
            f"Member {member_id} has reached the maximum borrowing limit ({limit} books)."
        )


class OutstandingFinesError(LibraryError):
    def __init__(self, member_id: str, balance) -> None:
        self.member_id = member_id
        self.balance = balance
        super().__init__(
            f"Member {member_id} has outstanding fines of ${balance:.2f}. Please pay fines first."
        )


class InvalidAmountError(LibraryError, ValueError):
    """A payment or fine amount that is not a finite number."""

    def __init__(self, value) -> None:
        self.value = value
        super().__init__(f"Invalid amount: {value!r}")
