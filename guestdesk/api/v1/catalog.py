# guestdesk/api/v1/catalog.py
"""
List types and sectors share one set of routes; build_catalog_router wires
a CatalogService to its prefix, capability and activity actions.
"""

import uuid
from typing import Callable, Type

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel
from sqlalchemy.orm import Session

from guestdesk.api.v1.views import catalog_view
from guestdesk.core.auth_deps import require_permission
from guestdesk.db.session import get_db
from guestdesk.policies.permissions import Principal
from guestdesk.schemas.catalog import ListTypeRequest, SectorRequest
from guestdesk.services.activity_service import ActivityAction, ActivityService
from guestdesk.services.catalog_service import CatalogService, list_types_service, sectors_service
from guestdesk.services.errors import Conflict, NotFound


def build_catalog_router(
    *,
    prefix: str,
    service: Callable[[], CatalogService],
    schema: Type[BaseModel],
    capability: str,
    actions: dict,
) -> APIRouter:
    router = APIRouter(prefix=prefix)
    can_read = require_permission("can_view_lists")
    can_write = require_permission(capability)

    def _log(db, request, principal, action, item, verb):
        svc = service()
        ActivityService().write(
            db,
            action=action,
            details=f'{svc.label} "{item.name}" {verb}',
            user_id=principal.user_id,
            request=request,
        )

    @router.get("")
    def list_items(
        only_active: bool = Query(default=False),
        db: Session = Depends(get_db),
        principal: Principal = Depends(can_read),
    ):
        items = service().list(db, only_active=only_active)
        return {"items": [catalog_view(i) for i in items], "count": len(items)}

    @router.post("")
    def create_item(
        body: schema,
        request: Request,
        db: Session = Depends(get_db),
        principal: Principal = Depends(can_write),
    ):
        data = body.model_dump(exclude_none=True)
        try:
            item = service().create(db, data)
        except Conflict as ex:
            raise HTTPException(status_code=409, detail=str(ex))
        except ValueError as ex:
            raise HTTPException(status_code=400, detail=str(ex))
        _log(db, request, principal, actions["created"], item, "created")
        return catalog_view(item)

    @router.patch("/{item_id}")
    def patch_item(
        item_id: uuid.UUID,
        body: schema,
        request: Request,
        db: Session = Depends(get_db),
        principal: Principal = Depends(can_write),
    ):
        data = body.model_dump(exclude_unset=True)
        if data.get("is_active", False) is None:
            data.pop("is_active")
        try:
            item = service().patch(db, item_id, data)
        except NotFound as ex:
            raise HTTPException(status_code=404, detail=str(ex))
        except Conflict as ex:
            raise HTTPException(status_code=409, detail=str(ex))
        except ValueError as ex:
            raise HTTPException(status_code=400, detail=str(ex))
        _log(db, request, principal, actions["updated"], item, "updated")
        return catalog_view(item)

    @router.post("/{item_id}/toggle")
    def toggle_item(
        item_id: uuid.UUID,
        request: Request,
        db: Session = Depends(get_db),
        principal: Principal = Depends(can_write),
    ):
        try:
            item = service().toggle(db, item_id)
        except NotFound as ex:
            raise HTTPException(status_code=404, detail=str(ex))
        _log(
            db, request, principal, actions["toggled"], item,
            "activated" if item.is_active else "deactivated",
        )
        return catalog_view(item)

    @router.delete("/{item_id}")
    def delete_item(
        item_id: uuid.UUID,
        request: Request,
        db: Session = Depends(get_db),
        principal: Principal = Depends(can_write),
    ):
        try:
            item = service().delete(db, item_id)
        except NotFound as ex:
            raise HTTPException(status_code=404, detail=str(ex))
        except Conflict as ex:
            raise HTTPException(status_code=409, detail=str(ex))
        _log(db, request, principal, actions["deleted"], item, "deleted")
        return {"deleted": True, "id": str(item_id)}

    return router


list_types_router = build_catalog_router(
    prefix="/list-types",
    service=list_types_service,
    schema=ListTypeRequest,
    capability="can_manage_list_types",
    actions={
        "created": ActivityAction.LIST_TYPE_CREATED,
        "updated": ActivityAction.LIST_TYPE_UPDATED,
        "toggled": ActivityAction.LIST_TYPE_TOGGLED,
        "deleted": ActivityAction.LIST_TYPE_DELETED,
    },
)

sectors_router = build_catalog_router(
    prefix="/sectors",
    service=sectors_service,
    schema=SectorRequest,
    capability="can_manage_sectors",
    actions={
        "created": ActivityAction.SECTOR_CREATED,
        "updated": ActivityAction.SECTOR_UPDATED,
        "toggled": ActivityAction.SECTOR_TOGGLED,
        "deleted": ActivityAction.SECTOR_DELETED,
    },
)
