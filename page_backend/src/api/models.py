from __future__ import annotations

from datetime import datetime
from typing import List, TypedDict


# PUBLIC_INTERFACE
class AttachmentEntity(TypedDict):
    """
    An opaque reference to an attachment. The store keeps it verbatim and
    never inspects it.
    """

    name: str
    url: str


# PUBLIC_INTERFACE
class PageEntity(TypedDict):
    """
    The domain model for a page held by the in-memory store.

    Fields:
    - id: Unique integer identifier assigned by the store (starts at 0)
    - text: Free-form text
    - tags: Ordered list of tags; duplicates allowed
    - due: Due datetime; queries compare its calendar date only
    - attachments: Ordered list of attachment references
    """

    id: int
    text: str
    tags: List[str]
    due: datetime
    attachments: List[AttachmentEntity]
