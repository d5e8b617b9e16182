"""
GraphQL surface for the page store, mounted at /graphql.

Resolvers are thin: they translate between strawberry types and the store's
PageEntity dicts and let PageNotFoundError propagate, which strawberry reports
in the response's "errors" array.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import strawberry
from fastapi import Depends
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info

from ..models import AttachmentEntity, PageEntity
from ..repositories import PageRepository, get_store

logger = logging.getLogger(__name__)


@strawberry.type
class Attachment:
    name: str
    url: str


@strawberry.type
class Page:
    id: int
    text: str
    tags: List[str]
    due: datetime
    attachments: List[Attachment]


@strawberry.input
class NewAttachment:
    name: str
    url: str


@strawberry.input
class NewPage:
    text: str
    tags: List[str]
    due: datetime
    attachments: Optional[List[NewAttachment]] = None


@strawberry.input
class PageInput:
    id: int
    text: str
    tags: List[str]
    due: datetime
    attachments: Optional[List[NewAttachment]] = None


def _store(info: Info) -> PageRepository:
    return info.context["store"]


def _to_page(entity: PageEntity) -> Page:
    return Page(
        id=entity["id"],
        text=entity["text"],
        tags=list(entity["tags"]),
        due=entity["due"],
        attachments=[Attachment(name=a["name"], url=a["url"]) for a in entity["attachments"]],
    )


def _to_attachments(attachments: Optional[List[NewAttachment]]) -> List[AttachmentEntity]:
    return [{"name": a.name, "url": a.url} for a in attachments or []]


@strawberry.type
class Query:
    @strawberry.field
    def get_all_pages(self, info: Info) -> List[Page]:
        return [_to_page(p) for p in _store(info).get_all_pages()]

    @strawberry.field
    def get_page(self, info: Info, id: int) -> Page:
        return _to_page(_store(info).get_page(id))

    @strawberry.field
    def get_pages_by_tag(self, info: Info, tag: str) -> List[Page]:
        return [_to_page(p) for p in _store(info).get_pages_by_tag(tag)]

    @strawberry.field
    def get_pages_by_due(self, info: Info, due: datetime) -> List[Page]:
        """Pages due on the calendar date of `due`; its time of day is ignored."""
        return [_to_page(p) for p in _store(info).get_pages_by_due_date(due.year, due.month, due.day)]


@strawberry.type
class Mutation:
    @strawberry.mutation
    def create_page(self, info: Info, input: NewPage) -> Page:
        store = _store(info)
        page_id = store.create_page(input.text, input.tags, input.due, _to_attachments(input.attachments))
        logger.info("created page via graphql", extra={"page_id": page_id})
        return _to_page(store.get_page(page_id))

    @strawberry.mutation
    def update_page(self, info: Info, input: PageInput) -> Page:
        entity: PageEntity = {
            "id": input.id,
            "text": input.text,
            "tags": list(input.tags),
            "due": input.due,
            "attachments": _to_attachments(input.attachments),
        }
        return _to_page(_store(info).update_page(entity))

    @strawberry.mutation
    def delete_page(self, info: Info, id: int) -> Optional[bool]:
        _store(info).delete_page(id)
        return True

    @strawberry.mutation
    def delete_all_pages(self, info: Info) -> Optional[bool]:
        _store(info).delete_all_pages()
        return True


schema = strawberry.Schema(query=Query, mutation=Mutation)


async def get_context(store: PageRepository = Depends(get_store)) -> Dict[str, Any]:
    return {"store": store}


# PUBLIC_INTERFACE
def create_graphql_router() -> GraphQLRouter:
    """Build the /graphql router bound to the store of the app it is mounted on."""
    return GraphQLRouter(schema, context_getter=get_context)
