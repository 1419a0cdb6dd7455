"""
api/routes/records.py
---------------------
Generic CRUD endpoints, one router per registered entity.

GET    {path}       — Tenant's records (array; total in X-Total-Count)
GET    {path}/{id}  — One record
POST   {path}       — Create a record
PATCH  {path}/{id}  — Partial update
PUT    {path}/{id}  — Same as PATCH (partial)
DELETE {path}/{id}  — Delete a record

Every handler takes its tenant from get_tenant_id; bodies are validated by
RecordService against the entity's schemas, so the routes accept raw JSON
objects and never build error responses by hand.
"""

import uuid
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.config import settings
from backoffice.db.session import get_db
from backoffice.dependencies import get_tenant_id
from backoffice.registry import EntitySchema
from backoffice.schemas.common import ERROR_RESPONSES, DeleteResponse
from backoffice.services.record_service import RecordService

_PAGING_PARAMS = {"skip", "limit"}


def build_crud_router(entity: EntitySchema) -> APIRouter:
    service = RecordService(entity)
    read_schema = entity.read_schema
    router = APIRouter(
        prefix=entity.path,
        tags=list(entity.tags) or [entity.label],
        responses={404: ERROR_RESPONSES[404]},
    )

    @router.get(
        "",
        response_model=list[read_schema],
        name=f"list_{entity.name}",
        summary=f"List {entity.label.lower()} records",
    )
    async def list_records(
        request: Request,
        response: Response,
        db: Annotated[AsyncSession, Depends(get_db)],
        tenant_id: Annotated[uuid.UUID, Depends(get_tenant_id)],
        skip: int = Query(0, ge=0),
        limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    ):
        """
        Records of the caller's tenant. Any other query parameter is a filter
        on one of the entity's filter fields (e.g. ?status=Active).
        """
        filters = {
            key: value
            for key, value in request.query_params.items()
            if key not in _PAGING_PARAMS
        }
        total, records = await service.list_records(
            db, tenant_id, filters, skip=skip, limit=limit
        )
        response.headers["X-Total-Count"] = str(total)
        return [read_schema.model_validate(r) for r in records]

    @router.get(
        "/{record_id}",
        response_model=read_schema,
        name=f"get_{entity.name}",
        summary=f"Get one {entity.label.lower()}",
    )
    async def get_record(
        record_id: str,
        db: Annotated[AsyncSession, Depends(get_db)],
        tenant_id: Annotated[uuid.UUID, Depends(get_tenant_id)],
    ):
        record = await service.get_record(db, tenant_id, record_id)
        return read_schema.model_validate(record)

    @router.post(
        "",
        response_model=read_schema,
        status_code=status.HTTP_201_CREATED,
        name=f"create_{entity.name}",
        summary=f"Create a {entity.label.lower()}",
        responses={409: ERROR_RESPONSES[409], 422: ERROR_RESPONSES[422]},
    )
    async def create_record(
        payload: Annotated[dict[str, Any], Body()],
        db: Annotated[AsyncSession, Depends(get_db)],
        tenant_id: Annotated[uuid.UUID, Depends(get_tenant_id)],
    ):
        record = await service.create_record(db, tenant_id, payload)
        return read_schema.model_validate(record)

    async def update_record(
        record_id: str,
        payload: Annotated[dict[str, Any], Body()],
        db: Annotated[AsyncSession, Depends(get_db)],
        tenant_id: Annotated[uuid.UUID, Depends(get_tenant_id)],
    ):
        """Partial update: keys left out of the body keep their stored value."""
        record = await service.update_record(db, tenant_id, record_id, payload)
        return read_schema.model_validate(record)

    for method in ("PATCH", "PUT"):
        router.add_api_route(
            "/{record_id}",
            update_record,
            methods=[method],
            response_model=read_schema,
            name=f"{method.lower()}_{entity.name}",
            summary=f"Update a {entity.label.lower()}",
            responses={409: ERROR_RESPONSES[409], 422: ERROR_RESPONSES[422]},
        )

    @router.delete(
        "/{record_id}",
        response_model=DeleteResponse,
        name=f"delete_{entity.name}",
        summary=f"Delete a {entity.label.lower()}",
    )
    async def delete_record(
        record_id: str,
        db: Annotated[AsyncSession, Depends(get_db)],
        tenant_id: Annotated[uuid.UUID, Depends(get_tenant_id)],
    ) -> DeleteResponse:
        return DeleteResponse(**await service.delete_record(db, tenant_id, record_id))

    return router
