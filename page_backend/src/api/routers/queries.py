from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Request

from ..repositories import PageRepository, get_store
from ..schemas import PageOut

logger = logging.getLogger(__name__)

router = APIRouter(tags=["queries"])


# PUBLIC_INTERFACE
@router.get(
    "/tag/{tag}",
    response_model=List[PageOut],
    summary="Pages By Tag",
    description="List the pages carrying the given tag (exact, case-sensitive match).",
)
def get_pages_by_tag(tag: str, request: Request, store: PageRepository = Depends(get_store)) -> List[PageOut]:
    logger.info("handling tags at %s", request.url.path, extra={"path": request.url.path})
    return [PageOut(**p) for p in store.get_pages_by_tag(tag)]  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.get(
    "/due/{year}/{month}/{day}",
    response_model=List[PageOut],
    summary="Pages By Due Date",
    description=(
        "List the pages due on the given calendar date. Time of day is ignored.\n\n"
        "Out-of-range months (outside 1..12) or days (outside 1..31) are rejected with 422."
    ),
    responses={
        200: {"description": "Pages retrieved successfully"},
        422: {"description": "Invalid date components"},
    },
)
def get_pages_by_due_date(
    request: Request,
    year: int = Path(..., description="Four-digit year"),
    month: int = Path(..., ge=1, le=12, description="Month, 1..12"),
    day: int = Path(..., ge=1, le=31, description="Day of month, 1..31"),
    store: PageRepository = Depends(get_store),
) -> List[PageOut]:
    """
    Range checks on month and day happen here; the store itself compares
    whatever it is given.
    """
    logger.info("handling due at %s", request.url.path, extra={"path": request.url.path})
    return [PageOut(**p) for p in store.get_pages_by_due_date(year, month, day)]  # type: ignore[arg-type]
