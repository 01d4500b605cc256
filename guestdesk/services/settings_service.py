from __future__ import annotations

import uuid
from typing import Dict, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from guestdesk.models.site_setting import SiteSetting

SITE_NAME = "site_name"
SITE_DESCRIPTION = "site_description"
ALLOW_PUBLIC_SUBMISSIONS = "allow_public_submissions"
AUTO_APPROVE_PUBLIC = "auto_approve_public_submissions"
MAX_GUESTS_PER_SUBMISSION = "max_guests_per_submission"

DEFAULTS: Dict[str, str] = {
    SITE_NAME: "Casa de Show",
    SITE_DESCRIPTION: "",
    ALLOW_PUBLIC_SUBMISSIONS: "true",
    AUTO_APPROVE_PUBLIC: "true",
    MAX_GUESTS_PER_SUBMISSION: "50",
}

# readable without a token
PUBLIC_KEYS = (SITE_NAME, SITE_DESCRIPTION, ALLOW_PUBLIC_SUBMISSIONS, MAX_GUESTS_PER_SUBMISSION)

MIN_SITE_NAME_LENGTH = 2
MAX_SITE_NAME_LENGTH = 50
MAX_GUESTS_CEILING = 500

_BOOL_KEYS = {ALLOW_PUBLIC_SUBMISSIONS, AUTO_APPROVE_PUBLIC}


def _normalize(key: str, raw: str) -> str:
    if key not in DEFAULTS:
        raise ValueError(f"Unknown setting {key}.")

    value = str(raw).strip()

    if key == SITE_NAME:
        if not value:
            raise ValueError("Site name is required.")
        if len(value) < MIN_SITE_NAME_LENGTH:
            raise ValueError(f"Site name must have at least {MIN_SITE_NAME_LENGTH} characters.")
        if len(value) > MAX_SITE_NAME_LENGTH:
            raise ValueError(f"Site name must have at most {MAX_SITE_NAME_LENGTH} characters.")
        return value.replace("<", "").replace(">", "")

    if key in _BOOL_KEYS:
        lowered = value.lower()
        if lowered not in {"true", "false"}:
            raise ValueError(f"{key} must be true or false.")
        return lowered

    if key == MAX_GUESTS_PER_SUBMISSION:
        try:
            n = int(value)
        except ValueError:
            raise ValueError(f"{key} must be an integer.")
        if not 1 <= n <= MAX_GUESTS_CEILING:
            raise ValueError(f"{key} must be between 1 and {MAX_GUESTS_CEILING}.")
        return str(n)

    return value.replace("<", "").replace(">", "")


class SiteSettingsService:
    def get_all(self, db: Session) -> Dict[str, str]:
        out = dict(DEFAULTS)
        rows = db.execute(select(SiteSetting)).scalars().all()
        for r in rows:
            out[r.setting_key] = r.setting_value
        return out

    def get(self, db: Session, key: str) -> str:
        row = db.get(SiteSetting, key)
        if row is None:
            return DEFAULTS[key]
        return row.setting_value

    def get_bool(self, db: Session, key: str) -> bool:
        return self.get(db, key).lower() == "true"

    def get_int(self, db: Session, key: str) -> int:
        try:
            return int(self.get(db, key))
        except ValueError:
            return int(DEFAULTS[key])

    def public(self, db: Session) -> Dict[str, str]:
        values = self.get_all(db)
        return {k: values[k] for k in PUBLIC_KEYS}

    def upsert(
        self,
        db: Session,
        *,
        values: Mapping[str, str],
        updated_by: Optional[str],
    ) -> Dict[str, str]:
        """
        Validate every key first, then write them in one commit.
        Returns only the keys whose value actually changed.
        """
        normalized = {k: _normalize(k, v) for k, v in values.items()}
        actor = uuid.UUID(updated_by) if updated_by else None

        changed: Dict[str, str] = {}
        for key, value in normalized.items():
            row = db.get(SiteSetting, key)
            if row is None:
                db.add(SiteSetting(setting_key=key, setting_value=value, updated_by=actor))
                if value != DEFAULTS[key]:
                    changed[key] = value
            elif row.setting_value != value:
                row.setting_value = value
                row.updated_by = actor
                changed[key] = value

        db.commit()
        return changed
