import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from book import Book
from exceptions import BookNotFoundError, MemberNotFoundError
from member import Member

logger = logging.getLogger(__name__)

SAMPLE_BOOKS = [
    ("The Great Gatsby", "F. Scott Fitzgerald", "9780743273565"),
    ("To Kill a Mockingbird", "Harper Lee", "9780446310789"),
    ("1984", "George Orwell", "9780451524935"),
    ("Pride and Prejudice", "Jane Austen", "9780141439518"),
    ("The Hobbit", "J.R.R. Tolkien", "9780547928227"),
]

SAMPLE_MEMBERS = [
    ("John Smith", "john@email.com", "555-0101"),
    ("Emma Johnson", "emma@email.com", "555-0102"),
    ("Robert Brown", "robert@email.com", "555-0103"),
]


class Library:
    """Owns the book and member registries and hands out sequential ids."""

    def __init__(self, seed: bool = False) -> None:
        self.books: Dict[str, Book] = {}
        self.members: Dict[str, Member] = {}
        self._book_counter = 1
        self._member_counter = 1
        if seed:
            self.load_sample_data()

    # ------------------------- Core operations ------------------------- #
    def add_book(self, title: str, author: str, isbn: str) -> Book:
        book_id = f"B{self._book_counter:03d}"
        self._book_counter += 1
        book = Book(book_id, title, author, isbn)
        self.books[book_id] = book
        logger.info("Book added: %s (%s)", book.title, book_id)
        return book

    def register_member(self, name: str, email: str, phone: str) -> Member:
        member_id = f"M{self._member_counter:03d}"
        self._member_counter += 1
        member = Member(member_id, name, email, phone)
        self.members[member_id] = member
        logger.info("Member registered: %s (%s)", member.name, member_id)
        return member

    def load_sample_data(self) -> None:
        """Populate the catalog with the fixed demo books and members."""
        for title, author, isbn in SAMPLE_BOOKS:
            self.add_book(title, author, isbn)
        for name, email, phone in SAMPLE_MEMBERS:
            self.register_member(name, email, phone)

    def get_book(self, book_id: str) -> Book:
        try:
            return self.books[book_id]
        except KeyError:
            raise BookNotFoundError(book_id) from None

    def get_member(self, member_id: str) -> Member:
        try:
            return self.members[member_id]
        except KeyError:
            raise MemberNotFoundError(member_id) from None

    # ------------------------- Lookup ------------------------- #
    def find_book(self, term: str) -> Optional[Book]:
        """Match id or title ignoring case, or the ISBN exactly."""
        needle = term.lower()
        for book in self.books.values():
            if book.book_id.lower() == needle or book.title.lower() == needle or book.isbn == term:
                return book
        return None

    def find_member(self, term: str) -> Optional[Member]:
        needle = term.lower()
        for member in self.members.values():
            if needle in (member.member_id.lower(), member.name.lower(), member.email.lower()):
                return member
        return None

    def search_books(self, query: str) -> List[Book]:
        """Search for books by title, author or ISBN fragment."""
        needle = query.lower()
        return [
            book
            for book in self.books.values()
            if needle in book.title.lower() or needle in book.author.lower() or query in book.isbn
        ]

    def list_books(self) -> List[Book]:
        return list(self.books.values())

    def list_available_books(self) -> List[Book]:
        return [b for b in self.books.values() if b.available]

    def list_members(self) -> List[Member]:
        return list(self.members.values())

    def get_statistics(self) -> Dict[str, Any]:
        available = sum(1 for b in self.books.values() if b.available)
        return {
            "total_books": len(self.books),
            "available_books": available,
            "borrowed_books": len(self.books) - available,
            "total_members": len(self.members),
            "outstanding_fines": sum((m.fines for m in self.members.values()), Decimal("0")),
        }
