import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional
from sqlalchemy import update, select
from sqlalchemy.ext.asyncio import AsyncSession
from url_registry.db.models import UrlRecord

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    # Columns are timestamp without time zone; store naive UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class UrlRepository:

    @staticmethod
    def _generate_id() -> str:
        return str(uuid.uuid4())

    @staticmethod
    async def list_active(session: AsyncSession) -> List[UrlRecord]:
        """All records that are not soft-deleted, ordered by name."""
        result = await session.execute(
            select(UrlRecord)
            .where(UrlRecord.is_deleted.is_(False))
            .order_by(UrlRecord.name.asc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_active(session: AsyncSession, url_id: str) -> Optional[UrlRecord]:
        result = await session.execute(
            select(UrlRecord)
            .where(UrlRecord.id == url_id, UrlRecord.is_deleted.is_(False))
            .limit(1)
        )
        return result.scalars().first()

    @staticmethod
    async def create(session: AsyncSession, name: str, main_url: str, sub_urls: Dict[str, str]) -> UrlRecord:
        """
        Insert a new record with a fresh id.
        created_at and updated_at come from a single clock reading so they
        are equal on insert.
        """
        now = utcnow()
        record = UrlRecord(
            id=UrlRepository._generate_id(),
            name=name,
            main_url=main_url,
            sub_urls=sub_urls,
            is_deleted=False,
            deleted_at=None,
            created_at=now,
            updated_at=now,
        )
        session.add(record)
        await session.commit()
        logger.info(f"Created URL record: {record.id}")
        return record

    @staticmethod
    async def update_active(
        session: AsyncSession, url_id: str, name: str, main_url: str, sub_urls: Dict[str, str]
    ) -> Optional[UrlRecord]:
        """
        Overwrite a live record in one conditional statement.
        Returns None when no non-deleted row matched, in which case nothing
        was written.
        """
        result = await session.execute(
            update(UrlRecord)
            .where(UrlRecord.id == url_id, UrlRecord.is_deleted.is_(False))
            .values(name=name, main_url=main_url, sub_urls=sub_urls, updated_at=utcnow())
            .returning(UrlRecord)
            .execution_options(synchronize_session=False, populate_existing=True)
        )
        record = result.scalars().first()
        if record is None:
            await session.rollback()
            return None

        await session.commit()
        logger.info(f"Updated URL record: {url_id}")
        return record

    @staticmethod
    async def soft_delete(session: AsyncSession, url_id: str) -> bool:
        """
        Flag a record as deleted, whatever its current state.
        Returns False only when the id does not exist at all.
        """
        result = await session.execute(
            update(UrlRecord)
            .where(UrlRecord.id == url_id)
            .values(is_deleted=True, deleted_at=utcnow())
            .returning(UrlRecord.id)
            .execution_options(synchronize_session=False)
        )
        deleted_id = result.scalar()
        if deleted_id is None:
            await session.rollback()
            return False

        await session.commit()
        logger.info(f"Soft-deleted URL record: {url_id}")
        return True
