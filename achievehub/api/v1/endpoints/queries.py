"""
Queries API
Students follow up on their challenges, admins answer them
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from achievehub.api.deps import get_db, require_reviewer, require_student
from achievehub.core.security import RequestContext
from achievehub.schemas.query import QueriesResponse, QueryRespond, QueryResponse
from achievehub.services.query_service import QueryService
from achievehub.utils.constants import QueryStatus

router = APIRouter()


def _as_response(queries) -> QueriesResponse:
    return QueriesResponse(
        total=len(queries),
        queries=[QueryResponse.from_query(q) for q in queries],
    )


@router.get("/mine", response_model=QueriesResponse)
async def list_my_queries(
    ctx: RequestContext = Depends(require_student),
    db: AsyncSession = Depends(get_db),
):
    """The student's queries with the achievement title, newest first."""
    return _as_response(await QueryService(db).list_for_student(ctx))


@router.get("", response_model=QueriesResponse)
async def list_queries(
    status_filter: Optional[QueryStatus] = Query(None, alias="status"),
    ctx: RequestContext = Depends(require_reviewer),
    db: AsyncSession = Depends(get_db),
):
    """
    All queries, newest first

    **Auth**: Admin or Super Admin

    **Query Parameters**:
    - `status`: `open` / `in_progress` / `resolved` (optional)
    """
    return _as_response(await QueryService(db).list_all(status=status_filter))


@router.post("/{query_id}/respond", response_model=QueryResponse)
async def respond_to_query(
    query_id: UUID,
    body: QueryRespond,
    ctx: RequestContext = Depends(require_reviewer),
    db: AsyncSession = Depends(get_db),
):
    """
    Answer a query and mark it resolved

    The achievement keeps its status; a resolved query answers 409.
    """
    query = await QueryService(db).respond(ctx, query_id, body.response)
    return QueryResponse.from_query(query)
