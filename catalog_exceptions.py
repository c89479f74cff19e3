from typing import Optional


class LibraryError(Exception):
    """Base exception for library catalog errors."""


class NotFoundError(LibraryError):
    """Requested record does not exist in the catalog."""


class BookNotFoundError(NotFoundError):
    """Requested book id does not exist in the catalog."""

    def __init__(self, book_id: int) -> None:
        super().__init__("Book not found")
        self.book_id = book_id


class MemberNotFoundError(NotFoundError):
    """Requested member id does not exist in the catalog."""

    def __init__(self, member_id: int) -> None:
        super().__init__("Member not found")
        self.member_id = member_id


class BookUnavailableError(LibraryError):
    """Book is already checked out."""

    def __init__(self, book_id: int, due_date: Optional[int] = None) -> None:
        super().__init__("Book is not available")
        self.book_id = book_id
        self.due_date = due_date


class NotBorrowedByMemberError(LibraryError):
    """Return attempted for a book the member does not hold."""

    def __init__(self, book_id: int, member_id: int) -> None:
        super().__init__("This member has not borrowed this book")
        self.book_id = book_id
        self.member_id = member_id
