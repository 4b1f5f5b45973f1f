"""Client-side search over a collection."""

from typing import Callable, Generic, Sequence, TypeVar

T = TypeVar("T")

SearchPredicate = Callable[[T, str], bool]


class SearchFilter(Generic[T]):
    """Filters items by a caller predicate against a live query.

    An empty query returns the source collection itself and never calls the
    predicate. Results keep the source order and are recomputed only when
    the source collection (by identity) or the query changes.
    """

    def __init__(self, items: Sequence[T], predicate: SearchPredicate):
        self._items = items
        self._predicate = predicate
        self._query = ""
        self._cached_source: Sequence[T] | None = None
        self._cached_query = ""
        self._cached: list[T] = []

    @property
    def query(self) -> str:
        return self._query

    @query.setter
    def query(self, value: str) -> None:
        self._query = value

    @property
    def items(self) -> Sequence[T]:
        return self._items

    @items.setter
    def items(self, value: Sequence[T]) -> None:
        self._items = value

    @property
    def filtered(self) -> Sequence[T]:
        if not self._query:
            return self._items

        if self._cached_source is not self._items or self._cached_query != self._query:
            self._cached = [
                item for item in self._items if self._predicate(item, self._query)
            ]
            self._cached_source = self._items
            self._cached_query = self._query
        return self._cached

    def clear(self) -> None:
        self._query = ""
