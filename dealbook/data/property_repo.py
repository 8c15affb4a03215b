"""Deal persistence: database records merged with the built-in static deals."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dealbook.models.db import PropertyRecord

logger = logging.getLogger(__name__)

_COLUMNS = [c.key for c in PropertyRecord.__table__.columns]


def _to_dict(record: PropertyRecord) -> dict:
    return {name: getattr(record, name) for name in _COLUMNS}


class PropertyRepository:
    """Reads fall back to the static deals when the database cannot be queried.

    Writes only ever go to the database and let errors propagate.
    """

    def __init__(self, session: AsyncSession, static_deals: list[dict] | None = None):
        self.session = session
        self.static_deals = static_deals or []

    def _merge_static(self, db_props: list[dict], include_drafts: bool) -> list[dict]:
        db_ids = {p["id"] for p in db_props}
        extras = [
            d for d in self.static_deals
            if d["id"] not in db_ids and (include_drafts or not d.get("is_draft", False))
        ]
        return db_props + extras

    async def _list(self, include_drafts: bool) -> list[dict]:
        stmt = (
            select(PropertyRecord)
            .where(PropertyRecord.is_deleted.is_(False))
            .order_by(PropertyRecord.created_at.desc())
        )
        if not include_drafts:
            stmt = stmt.where(PropertyRecord.is_draft.is_(False))
        try:
            rows = (await self.session.scalars(stmt)).all()
        except SQLAlchemyError as e:
            logger.warning("Property query failed, serving static deals only: %s", e)
            return self._merge_static([], include_drafts)
        return self._merge_static([_to_dict(r) for r in rows], include_drafts)

    async def list_published(self) -> list[dict]:
        return await self._list(include_drafts=False)

    async def list_all(self) -> list[dict]:
        """Drafts included, for the admin view."""
        return await self._list(include_drafts=True)

    async def get(self, property_id: str) -> dict | None:
        try:
            record = await self.session.get(PropertyRecord, property_id)
        except SQLAlchemyError as e:
            logger.warning("Property lookup failed for %s, checking static deals: %s", property_id, e)
            record = None
        if record is not None and not record.is_deleted:
            return _to_dict(record)
        return next((d for d in self.static_deals if d["id"] == property_id), None)

    async def _get_live_record(self, property_id: str) -> PropertyRecord | None:
        record = await self.session.get(PropertyRecord, property_id)
        if record is None or record.is_deleted:
            return None
        return record

    async def create(self, data: dict) -> dict:
        values = {k: v for k, v in data.items() if k in _COLUMNS and v is not None}
        record = PropertyRecord(**values)
        self.session.add(record)
        await self.session.commit()
        await self.session.refresh(record)
        logger.info("Created property %s", record.id)
        return _to_dict(record)

    async def update(self, property_id: str, updates: dict) -> dict | None:
        record = await self._get_live_record(property_id)
        if record is None:
            return None
        for key, value in updates.items():
            if key in _COLUMNS and key != "id":
                setattr(record, key, value)
        await self.session.commit()
        await self.session.refresh(record)
        return _to_dict(record)

    async def soft_delete(self, property_id: str) -> bool:
        record = await self._get_live_record(property_id)
        if record is None:
            return False
        record.is_deleted = True
        await self.session.commit()
        logger.info("Soft-deleted property %s", property_id)
        return True
