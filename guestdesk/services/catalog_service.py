"""
List types and sectors: the two tag tables an event list is built from.

Both share one service; only the model class and the referencing column on
event_lists differ.
"""
from __future__ import annotations

import re
import uuid
from typing import Any, Dict, List, Optional, Type, Union

from sqlalchemy import asc, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from guestdesk.models.event_list import EventList
from guestdesk.models.list_type import ListType
from guestdesk.models.sector import Sector
from guestdesk.services.errors import Conflict, NotFound

CatalogModel = Union[ListType, Sector]

COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


def normalize_color(color: Optional[str]) -> Optional[str]:
    if color is None:
        return None
    value = color.strip()
    if not COLOR_RE.match(value):
        raise ValueError("Color must be a hex value like #3B82F6.")
    return value.upper()


class CatalogService:
    def __init__(self, model: Type[CatalogModel], *, label: str, fields: set):
        self.model = model
        self.label = label
        self.fields = fields
        self._ref_column = EventList.list_type_id if model is ListType else EventList.sector_id

    def list(self, db: Session, *, only_active: bool = False) -> List[CatalogModel]:
        stmt = select(self.model)
        if only_active:
            stmt = stmt.where(self.model.is_active.is_(True))
        return list(db.execute(stmt.order_by(asc(self.model.name))).scalars().all())

    def get_or_404(self, db: Session, item_id: uuid.UUID) -> CatalogModel:
        item = db.get(self.model, item_id)
        if item is None:
            raise NotFound(f"{self.label} not found.")
        return item

    def _clean(self, data: Dict[str, Any]) -> Dict[str, Any]:
        out = {k: v for k, v in data.items() if k in self.fields}
        if "name" in out:
            name = (out["name"] or "").strip()
            if not name:
                raise ValueError(f"{self.label} name is required.")
            out["name"] = name
        if "color" in out and out["color"] is not None:
            out["color"] = normalize_color(out["color"])
        return out

    def _commit(self, db: Session) -> None:
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise Conflict(f"A {self.label.lower()} with this name already exists.")

    def create(self, db: Session, data: Dict[str, Any]) -> CatalogModel:
        clean = self._clean(data)
        if "name" not in clean:
            raise ValueError(f"{self.label} name is required.")
        if clean.get("color") is None:
            clean.pop("color", None)
        item = self.model(**clean)
        db.add(item)
        self._commit(db)
        return item

    def patch(self, db: Session, item_id: uuid.UUID, data: Dict[str, Any]) -> CatalogModel:
        item = self.get_or_404(db, item_id)
        for key, value in self._clean(data).items():
            if key == "color" and value is None:
                continue
            setattr(item, key, value)
        self._commit(db)
        return item

    def toggle(self, db: Session, item_id: uuid.UUID) -> CatalogModel:
        item = self.get_or_404(db, item_id)
        item.is_active = not item.is_active
        db.commit()
        return item

    def usage_count(self, db: Session, item_id: uuid.UUID) -> int:
        return db.execute(select(func.count(EventList.id)).where(self._ref_column == item_id)).scalar_one()

    def delete(self, db: Session, item_id: uuid.UUID) -> CatalogModel:
        item = self.get_or_404(db, item_id)
        used = self.usage_count(db, item_id)
        if used:
            raise Conflict(f"Cannot delete: {used} list(s) use this {self.label.lower()}.")
        db.delete(item)
        db.commit()
        return item


def list_types_service() -> CatalogService:
    return CatalogService(ListType, label="List type", fields={"name", "description", "color", "is_active"})


def sectors_service() -> CatalogService:
    return CatalogService(
        Sector, label="Sector", fields={"name", "description", "color", "capacity", "is_active"}
    )
