from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from threading import RLock
from typing import Iterable, List, Optional

from fastapi import Request

from .errors import PageNotFoundError
from .models import AttachmentEntity, PageEntity


def _copy_page(page: PageEntity) -> PageEntity:
    copied = page.copy()
    copied["tags"] = list(page["tags"])
    copied["attachments"] = [a.copy() for a in page["attachments"]]
    return copied


# PUBLIC_INTERFACE
class PageRepository(ABC):
    """Abstract repository contract for page storage backends."""

    @abstractmethod
    def create_page(
        self,
        text: str,
        tags: Iterable[str],
        due: datetime,
        attachments: Optional[Iterable[AttachmentEntity]] = None,
    ) -> int:
        """Store a new page and return its id."""

    @abstractmethod
    def get_page(self, page_id: int) -> PageEntity:
        """Return the page with the given id. Raise PageNotFoundError if absent."""

    @abstractmethod
    def get_all_pages(self) -> List[PageEntity]:
        """Return every live page, in arbitrary order."""

    @abstractmethod
    def update_page(self, page: PageEntity) -> PageEntity:
        """Replace the page stored under page["id"]. Raise PageNotFoundError if absent."""

    @abstractmethod
    def delete_page(self, page_id: int) -> None:
        """Delete the page with the given id. Raise PageNotFoundError if absent."""

    @abstractmethod
    def delete_all_pages(self) -> None:
        """Delete every page. Ids already issued are never handed out again."""

    @abstractmethod
    def get_pages_by_tag(self, tag: str) -> List[PageEntity]:
        """Return the pages carrying the given tag, in arbitrary order."""

    @abstractmethod
    def get_pages_by_due_date(self, year: int, month: int, day: int) -> List[PageEntity]:
        """Return the pages due on the given calendar date, in arbitrary order."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of live pages."""


class InMemoryPageStore(PageRepository):
    """
    Thread-safe in-memory page store.

    A single lock guards both the id->page mapping and the id counter, and
    every public method holds it for its whole duration. Pages handed in or
    out are copied so that callers never share lists with the store.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._pages: dict[int, PageEntity] = {}
        self._next_id = 0

    def create_page(
        self,
        text: str,
        tags: Iterable[str],
        due: datetime,
        attachments: Optional[Iterable[AttachmentEntity]] = None,
    ) -> int:
        with self._lock:
            page: PageEntity = {
                "id": self._next_id,
                "text": text,
                "tags": list(tags),
                "due": due,
                "attachments": [a.copy() for a in attachments or []],
            }
            self._pages[page["id"]] = page
            self._next_id += 1
            return page["id"]

    def get_page(self, page_id: int) -> PageEntity:
        with self._lock:
            page = self._pages.get(page_id)
            if page is None:
                raise PageNotFoundError(page_id)
            return _copy_page(page)

    def get_all_pages(self) -> List[PageEntity]:
        with self._lock:
            return [_copy_page(p) for p in self._pages.values()]

    def update_page(self, page: PageEntity) -> PageEntity:
        with self._lock:
            page_id = page["id"]
            if page_id not in self._pages:
                raise PageNotFoundError(page_id)
            self._pages[page_id] = _copy_page(page)
            return _copy_page(page)

    def delete_page(self, page_id: int) -> None:
        with self._lock:
            if self._pages.pop(page_id, None) is None:
                raise PageNotFoundError(page_id)

    def delete_all_pages(self) -> None:
        with self._lock:
            # _next_id is not reset: ids are never reused
            self._pages = {}

    def get_pages_by_tag(self, tag: str) -> List[PageEntity]:
        with self._lock:
            return [_copy_page(p) for p in self._pages.values() if tag in p["tags"]]

    def get_pages_by_due_date(self, year: int, month: int, day: int) -> List[PageEntity]:
        with self._lock:
            return [
                _copy_page(p)
                for p in self._pages.values()
                if (p["due"].year, p["due"].month, p["due"].day) == (year, month, day)
            ]

    def count(self) -> int:
        with self._lock:
            return len(self._pages)


# PUBLIC_INTERFACE
def get_store(request: Request) -> PageRepository:
    """
    FastAPI dependency returning the store owned by the running application.
    The store is created by create_app() and kept on app.state.
    """
    return request.app.state.store
