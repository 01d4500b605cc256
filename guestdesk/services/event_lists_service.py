# guestdesk/services/event_lists_service.py
from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy import asc, case, func, select
from sqlalchemy.orm import Session

from guestdesk.models.event_list import EventList
from guestdesk.models.guest import Guest
from guestdesk.models.list_type import ListType
from guestdesk.models.sector import Sector
from guestdesk.services.errors import Conflict, NotFound

EDITABLE_FIELDS = {"name", "description", "list_type_id", "sector_id", "max_capacity", "is_active"}


@dataclass(frozen=True)
class ListCounts:
    guest_count: int = 0
    checked_in_count: int = 0


def remaining_capacity(max_capacity: Optional[int], guest_count: int) -> Optional[int]:
    if max_capacity is None:
        return None
    return max(max_capacity - guest_count, 0)


class EventListsService:
    def _check_refs(self, db: Session, data: Dict[str, Any]) -> None:
        if "list_type_id" in data and db.get(ListType, data["list_type_id"]) is None:
            raise NotFound("List type not found.")
        if "sector_id" in data and db.get(Sector, data["sector_id"]) is None:
            raise NotFound("Sector not found.")

    def create(
        self, db: Session, *, event_id: uuid.UUID, created_by: str, fields: Dict[str, Any]
    ) -> EventList:
        data = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
        name = (data.get("name") or "").strip()
        if not name:
            raise ValueError("List name is required.")
        data["name"] = name
        self._check_refs(db, data)

        lst = EventList(event_id=event_id, created_by=uuid.UUID(created_by), **data)
        db.add(lst)
        db.commit()
        return lst

    def get_or_404(self, db: Session, *, event_id: uuid.UUID, list_id: uuid.UUID) -> EventList:
        lst = db.get(EventList, list_id)
        if lst is None or lst.event_id != event_id:
            raise NotFound("Event list not found.")
        return lst

    def list_for_event(self, db: Session, event_id: uuid.UUID) -> List[EventList]:
        stmt = select(EventList).where(EventList.event_id == event_id).order_by(asc(EventList.name))
        return list(db.execute(stmt).scalars().unique().all())

    def counts(self, db: Session, list_ids: List[uuid.UUID]) -> Dict[uuid.UUID, ListCounts]:
        if not list_ids:
            return {}
        stmt = (
            select(
                Guest.event_list_id,
                func.count(Guest.id),
                func.sum(case((Guest.checked_in.is_(True), 1), else_=0)),
            )
            .where(Guest.event_list_id.in_(list_ids))
            .group_by(Guest.event_list_id)
        )
        out = {lid: ListCounts() for lid in list_ids}
        for lid, total, checked in db.execute(stmt).all():
            out[lid] = ListCounts(guest_count=int(total or 0), checked_in_count=int(checked or 0))
        return out

    def patch(
        self, db: Session, *, event_id: uuid.UUID, list_id: uuid.UUID, fields: Dict[str, Any]
    ) -> EventList:
        lst = self.get_or_404(db, event_id=event_id, list_id=list_id)
        data = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
        if "name" in data:
            data["name"] = (data["name"] or "").strip()
            if not data["name"]:
                raise ValueError("List name is required.")
        self._check_refs(db, data)

        if data.get("max_capacity") is not None:
            current = self.counts(db, [lst.id])[lst.id].guest_count
            if data["max_capacity"] < current:
                raise Conflict(
                    f"List already has {current} guests; capacity cannot go below that."
                )

        for key, value in data.items():
            setattr(lst, key, value)
        db.commit()
        return lst

    def delete(self, db: Session, *, event_id: uuid.UUID, list_id: uuid.UUID) -> EventList:
        lst = self.get_or_404(db, event_id=event_id, list_id=list_id)
        guests = self.counts(db, [lst.id])[lst.id].guest_count
        if guests:
            raise Conflict(f'Cannot delete list "{lst.name}": it has {guests} guest(s).')
        db.delete(lst)
        db.commit()
        return lst
