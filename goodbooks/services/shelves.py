"""Shelf membership view: shelf counts, per-book shelf tags and shelf pickers."""

from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass, field

from goodbooks.db.repository import BookRepository
from goodbooks.models.book import Book
from goodbooks.models.shelf import Membership, Shelf


@dataclass
class ShelfCount:
    """A shelf with its member count."""

    shelf: Shelf
    count: int


@dataclass
class ShelfMembershipView:
    """Read-only joins over one snapshot of books, shelves and memberships.

    Build a new view after every membership change; nothing is updated in place.
    """

    books: Sequence[Book]
    shelves: Sequence[Shelf]
    memberships: Sequence[Membership]
    _members: dict[int, set[str]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._members = defaultdict(set)
        for membership in self.memberships:
            self._members[membership.shelf_id].add(membership.book_id)

    @classmethod
    async def load(cls, repository: BookRepository) -> "ShelfMembershipView":
        """Pull a fresh snapshot from the repository."""
        books = await repository.get_all_books()
        shelves = await repository.get_all_shelves()
        memberships = await repository.get_memberships()
        return cls(books=books, shelves=shelves, memberships=memberships)

    def shelf_counts(self) -> list[ShelfCount]:
        """Member count for every shelf, including empty ones."""
        return [ShelfCount(shelf=shelf, count=len(self._members.get(shelf.id, ()))) for shelf in self.shelves]

    def books_to_shelves(self) -> dict[str, list[Shelf]]:
        """Shelves each book belongs to, keyed by book id (one pass over memberships)."""
        shelves_by_id = {shelf.id: shelf for shelf in self.shelves}
        index: dict[str, list[Shelf]] = defaultdict(list)
        for membership in self.memberships:
            shelf = shelves_by_id.get(membership.shelf_id)
            if shelf is not None:
                index[membership.book_id].append(shelf)
        return dict(index)

    def books_in_shelf(self, shelf_id: int) -> list[Book]:
        members = self._members.get(shelf_id, set())
        return [book for book in self.books if book.id in members]

    def available_books_for_shelf(self, shelf_id: int) -> list[Book]:
        """Books that can still be added to the shelf (all books minus its members)."""
        members = self._members.get(shelf_id, set())
        return [book for book in self.books if book.id not in members]
