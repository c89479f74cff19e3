from __future__ import annotations

import argparse
import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from catalog_exceptions import (
    LibraryError,
    BookNotFoundError,
    MemberNotFoundError,
    BookUnavailableError,
    NotBorrowedByMemberError,
)


# Logging configuration
logger = logging.getLogger("library_catalog")
logger.setLevel(logging.INFO)

if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


# Domain Models
@dataclass
class Book:
    """
    Represents a book in the catalog.

    Attributes:
        id (int): Catalog-assigned identifier, sequential from 1.
        title (str): Book title.
        author (str): Author name.
        isbn (str): ISBN text, stored as given.
        available (bool): Whether the book can be checked out.
        due_date (Optional[int]): Due timestamp in seconds since epoch,
            set only while the book is checked out.
    """
    id: int
    title: str
    author: str
    isbn: str
    available: bool = True
    due_date: Optional[int] = None

    def is_checked_out(self) -> bool:
        return not self.available

    def __str__(self) -> str:
        status = "Available" if self.available else "Checked Out"
        return f"Book: {self.title} by {self.author} (ISBN: {self.isbn}) - {status}"


@dataclass
class Member:
    """
    Represents a library member.

    Attributes:
        id (int): Catalog-assigned identifier, sequential from 1.
        name (str): Member name.
        borrowed_books (List[int]): Ids of currently borrowed books, in
            checkout order.
    """
    id: int
    name: str
    borrowed_books: List[int] = field(default_factory=list)


# Library Core
class Library:
    """
    In-memory catalog of books and members.

    Members only hold book ids; the ``books`` and ``members`` dicts own the
    records and every mutation goes through them. Ids come from two
    independent counters that start at 1 and never go back.

    Rules enforced:
        (1) A book can be checked out by one member at a time
        (2) Books are due 14 days from checkout
        (3) A member can only return a book they have borrowed
    """

    LOAN_PERIOD_DAYS = 14
    LOAN_PERIOD_SECONDS = 60 * 60 * 24 * LOAN_PERIOD_DAYS

    def __init__(self) -> None:
        """
        Initializes an empty catalog with both id counters at 1.
        """
        self.books: Dict[int, Book] = {}
        self.members: Dict[int, Member] = {}
        self.next_book_id = 1
        self.next_member_id = 1

    # Public API

    def add_book(self, title: str, author: str, isbn: str) -> int:
        """
        Adds a new available book and returns its id.

        ISBNs are not validated and duplicates are accepted.
        """
        book_id = self.next_book_id
        self.books[book_id] = Book(id=book_id, title=title, author=author, isbn=isbn)
        self.next_book_id += 1

        logger.info("Book added | book_id=%s title=%s", book_id, title)
        return book_id

    def add_member(self, name: str) -> int:
        """
        Registers a new member with nothing borrowed and returns their id.
        """
        member_id = self.next_member_id
        self.members[member_id] = Member(id=member_id, name=name)
        self.next_member_id += 1

        logger.info("Member added | member_id=%s name=%s", member_id, name)
        return member_id

    def get_book(self, book_id: int) -> Book:
        """
        Retrieves a book by id or raises BookNotFoundError.
        """
        if book_id not in self.books:
            logger.warning("Book not found | book_id=%s", book_id)
            raise BookNotFoundError(book_id)
        return self.books[book_id]

    def get_member(self, member_id: int) -> Member:
        """
        Retrieves a member by id or raises MemberNotFoundError.
        """
        if member_id not in self.members:
            logger.warning("Member not found | member_id=%s", member_id)
            raise MemberNotFoundError(member_id)
        return self.members[member_id]

    def check_out_book(
        self,
        book_id: int,
        member_id: int,
        now: Optional[int] = None
    ) -> None:
        """
        Checks out a book to a member.

        The due date is ``now + LOAN_PERIOD_SECONDS``, where ``now`` defaults
        to the current time in whole seconds since epoch.

        Raises:
            BookNotFoundError
            MemberNotFoundError
            BookUnavailableError
        """
        logger.info("check_out_book called | book_id=%s member_id=%s", book_id, member_id)

        book = self.get_book(book_id)
        member = self.get_member(member_id)

        if book.is_checked_out():
            logger.warning("Checkout rejected, book not available | book_id=%s due_date=%s",
                           book_id, book.due_date)
            raise BookUnavailableError(book_id, book.due_date)

        if now is None:
            now = int(time.time())

        book.available = False
        book.due_date = now + self.LOAN_PERIOD_SECONDS
        member.borrowed_books.append(book_id)

        logger.info("Checkout successful | book_id=%s member_id=%s due_date=%s",
                    book_id, member_id, book.due_date)

    def return_book(self, book_id: int, member_id: int) -> None:
        """
        Returns a book the member has borrowed.

        Raises:
            BookNotFoundError
            MemberNotFoundError
            NotBorrowedByMemberError
        """
        logger.info("return_book called | book_id=%s member_id=%s", book_id, member_id)

        book = self.get_book(book_id)
        member = self.get_member(member_id)

        if book_id not in member.borrowed_books:
            logger.warning("Return rejected, not borrowed by member | book_id=%s member_id=%s",
                           book_id, member_id)
            raise NotBorrowedByMemberError(book_id, member_id)

        book.available = True
        book.due_date = None
        member.borrowed_books = [b for b in member.borrowed_books if b != book_id]

        logger.info("Return successful | book_id=%s member_id=%s", book_id, member_id)

    def get_member_books(self, member_id: int) -> List[Book]:
        """
        Returns the member's borrowed books in checkout order.

        Ids that no longer resolve to a book are skipped.
        """
        logger.info("get_member_books called | member_id=%s", member_id)

        member = self.get_member(member_id)
        books = [self.books[b] for b in member.borrowed_books if b in self.books]

        logger.info("Member books listed | member_id=%s count=%d", member_id, len(books))
        return books

    def search_books(self, query: str) -> List[Book]:
        """
        Finds books whose title or author contains ``query`` (ignoring case)
        or whose ISBN contains it exactly. An empty query matches every book.
        """
        q = query.lower()

        def matches(b: Book) -> bool:
            return (
                q in b.title.lower()
                or q in b.author.lower()
                or query in b.isbn
            )

        logger.info("search_books called | query=%s", query)
        found = [b for b in self.books.values() if matches(b)]

        logger.info("Search complete | query=%s matches=%d", query, len(found))
        return found


# Main Program
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the library catalog demo.")
    parser.add_argument("--search", default="Rust", help="Query for the search step (default: Rust)")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Catalog log level (default: WARNING)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """
    Main driver program that demonstrates the catalog operations.

    Demonstrated scenarios:
        - adding books
        - adding a member
        - checking out a book
        - searching the catalog
        - listing a member's borrowed books
        - returning the book
    """
    args = build_parser().parse_args(argv)
    logger.setLevel(args.log_level)

    library = Library()

    book1_id = library.add_book(
        "The Rust Programming Language", "Steve Klabnik", "978-1593278281"
    )
    library.add_book(
        "Zero To Production In Rust", "Luca Palmieri", "978-3001234567"
    )

    member_id = library.add_member("John Doe")

    try:
        library.check_out_book(book1_id, member_id)
        print("Book checked out successfully")
    except LibraryError as e:
        print(f"Error checking out book: {e}")

    print(f"\nSearching for '{args.search}' books:")
    for book in library.search_books(args.search):
        print(book)

    try:
        books = library.get_member_books(member_id)
        print(f"\n{library.get_member(member_id).name}'s borrowed books:")
        for book in books:
            print(book)
    except LibraryError as e:
        print(f"Error getting member's books: {e}")

    try:
        library.return_book(book1_id, member_id)
        print("\nBook returned successfully")
    except LibraryError as e:
        print(f"Error returning book: {e}")


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        logger.exception("Unhandled fatal error | %s", e)
        raise
