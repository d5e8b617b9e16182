from __future__ import annotations


# PUBLIC_INTERFACE
class PageNotFoundError(LookupError):
    """Raised when an operation references a page id that is not in the store."""

    def __init__(self, page_id: int) -> None:
        self.page_id = page_id
        super().__init__(f"page with id={page_id} not found")
