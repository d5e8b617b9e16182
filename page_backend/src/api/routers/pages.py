from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status

from ..errors import PageNotFoundError
from ..repositories import PageRepository, get_store
from ..schemas import PageCreate, PageCreated, PageOut, PageUpdate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/page",
    tags=["pages"],
)


# PUBLIC_INTERFACE
@router.post(
    "/",
    response_model=PageCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create Page",
    description="Create a new page and return the id assigned to it.",
    responses={
        201: {"description": "Page created successfully"},
        422: {"description": "Validation error"},
    },
)
def create_page(payload: PageCreate, request: Request, store: PageRepository = Depends(get_store)) -> PageCreated:
    """
    Create a new page.
    """
    logger.info("handling create page at %s", request.url.path, extra={"path": request.url.path})
    page_id = store.create_page(
        payload.text,
        payload.tags,
        payload.due,
        [a.model_dump() for a in payload.attachments],
    )
    return PageCreated(id=page_id)


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_model=List[PageOut],
    summary="List Pages",
    description="List every page in the store. Ordering is unspecified.",
)
def get_all_pages(request: Request, store: PageRepository = Depends(get_store)) -> List[PageOut]:
    logger.info("handling get all pages at %s", request.url.path, extra={"path": request.url.path})
    return [PageOut(**p) for p in store.get_all_pages()]  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.put(
    "/",
    response_model=PageOut,
    summary="Replace Page",
    description=(
        "Replace the page identified by the 'id' field of the body. The stored record is "
        "overwritten entirely; omitted optional fields become empty."
    ),
    responses={
        200: {"description": "Page updated"},
        404: {"description": "Page not found"},
    },
)
def update_page(payload: PageUpdate, request: Request, store: PageRepository = Depends(get_store)) -> PageOut:
    """
    Full update (replace) of an existing page. Unknown ids are rejected and
    nothing is stored for them.
    """
    logger.info(
        "handling update page at %s",
        request.url.path,
        extra={"path": request.url.path, "page_id": payload.id},
    )
    try:
        updated = store.update_page(payload.model_dump())  # type: ignore[arg-type]
    except PageNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return PageOut(**updated)  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.delete(
    "/",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete All Pages",
    description="Delete every page. Identifiers already issued are not reused.",
)
def delete_all_pages(request: Request, store: PageRepository = Depends(get_store)) -> None:
    logger.info("handling delete all pages at %s", request.url.path, extra={"path": request.url.path})
    store.delete_all_pages()
    return None


# PUBLIC_INTERFACE
@router.get(
    "/{page_id}",
    response_model=PageOut,
    summary="Get Page",
    description="Get a single page by ID.",
    responses={
        200: {"description": "Page found"},
        404: {"description": "Page not found"},
    },
)
def get_page(page_id: int, request: Request, store: PageRepository = Depends(get_store)) -> PageOut:
    """
    Retrieve a single page by its ID.
    """
    logger.info("handling get page at %s", request.url.path, extra={"path": request.url.path, "page_id": page_id})
    try:
        page = store.get_page(page_id)
    except PageNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return PageOut(**page)  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.delete(
    "/{page_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Page",
    description="Delete a page by ID.",
    responses={
        204: {"description": "Page deleted"},
        404: {"description": "Page not found"},
    },
)
def delete_page(page_id: int, request: Request, store: PageRepository = Depends(get_store)) -> None:
    """
    Delete a page. Returns 204 on success, 404 if not found.
    """
    logger.info("handling delete page at %s", request.url.path, extra={"path": request.url.path, "page_id": page_id})
    try:
        store.delete_page(page_id)
    except PageNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return None
