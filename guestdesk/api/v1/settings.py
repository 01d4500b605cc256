# guestdesk/api/v1/settings.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from guestdesk.core.auth_deps import get_optional_principal, require_permission
from guestdesk.db.session import get_db
from guestdesk.policies.permissions import Principal, permissions_for
from guestdesk.schemas.settings import SiteSettingsRequest
from guestdesk.services.activity_service import ActivityAction, ActivityService
from guestdesk.services.settings_service import SiteSettingsService

router = APIRouter(prefix="/settings")


@router.get("")
def get_site_settings(
    db: Session = Depends(get_db),
    principal=Depends(get_optional_principal),
):
    """Anyone gets the public subset; settings managers get every key."""
    svc = SiteSettingsService()
    if permissions_for(principal).can_manage_settings:
        return {"settings": svc.get_all(db)}
    return {"settings": svc.public(db)}


@router.put("")
def update_site_settings(
    body: SiteSettingsRequest,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permission("can_manage_settings")),
):
    svc = SiteSettingsService()
    try:
        changed = svc.upsert(db, values=body.as_values(), updated_by=principal.user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if changed:
        summary = ", ".join(f"{k}={v}" for k, v in sorted(changed.items()))
        ActivityService().write(
            db,
            action=ActivityAction.SETTINGS_CHANGED,
            details=f"Settings changed: {summary}",
            user_id=principal.user_id,
            request=request,
        )
    return {"settings": svc.get_all(db), "changed": sorted(changed)}
