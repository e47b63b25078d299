import logging
from sqlalchemy.ext.asyncio import AsyncSession
from url_registry.db.models import UrlRecord
from url_registry.db.url_repository import UrlRepository
from url_registry.models.schemas import UrlPayload, UrlRecordOut

logger = logging.getLogger(__name__)

NOT_FOUND = "URL not found"
FIELDS_REQUIRED = "Name and mainUrl are required"


def _serialize(record: UrlRecord) -> dict:
    return UrlRecordOut.model_validate(record).model_dump(by_alias=True, mode="json")


def _failure(error: str) -> dict:
    return {"success": False, "error": error}


class URLService:
    """
    CRUD over URL records, answering with the {success, data|error|message}
    envelope. Store failures are logged and reported in-band; nothing is
    retried.
    """

    @staticmethod
    def _missing_required(payload: UrlPayload) -> bool:
        return not payload.name or not payload.main_url

    @classmethod
    async def list_urls(cls, session: AsyncSession) -> dict:
        try:
            records = await UrlRepository.list_active(session)
            return {"success": True, "data": [_serialize(r) for r in records]}
        except Exception as e:
            await session.rollback()
            logger.error(f"Error fetching URLs: {e}")
            return _failure("Failed to fetch URLs")

    @classmethod
    async def get_url(cls, session: AsyncSession, url_id: str) -> dict:
        try:
            record = await UrlRepository.get_active(session, url_id)
            if record is None:
                return _failure(NOT_FOUND)
            return {"success": True, "data": _serialize(record)}
        except Exception as e:
            await session.rollback()
            logger.error(f"Error fetching URL {url_id}: {e}")
            return _failure("Failed to fetch URL")

    @classmethod
    async def create_url(cls, session: AsyncSession, payload: UrlPayload) -> dict:
        if cls._missing_required(payload):
            return _failure(FIELDS_REQUIRED)

        try:
            record = await UrlRepository.create(
                session,
                name=payload.name,
                main_url=payload.main_url,
                sub_urls=payload.sub_urls or {},
            )
            return {"success": True, "data": _serialize(record)}
        except Exception as e:
            await session.rollback()
            logger.error(f"Error creating URL: {e}")
            return _failure("Failed to create URL")

    @classmethod
    async def update_url(cls, session: AsyncSession, url_id: str, payload: UrlPayload) -> dict:
        if cls._missing_required(payload):
            return _failure(FIELDS_REQUIRED)

        try:
            record = await UrlRepository.update_active(
                session,
                url_id,
                name=payload.name,
                main_url=payload.main_url,
                sub_urls=payload.sub_urls or {},
            )
            if record is None:
                return _failure(NOT_FOUND)
            return {"success": True, "data": _serialize(record)}
        except Exception as e:
            await session.rollback()
            logger.error(f"Error updating URL {url_id}: {e}")
            return _failure("Failed to update URL")

    @classmethod
    async def delete_url(cls, session: AsyncSession, url_id: str) -> dict:
        try:
            deleted = await UrlRepository.soft_delete(session, url_id)
            if not deleted:
                return _failure(NOT_FOUND)
            return {"success": True, "message": "URL deleted successfully"}
        except Exception as e:
            await session.rollback()
            logger.error(f"Error deleting URL {url_id}: {e}")
            return _failure("Failed to delete URL")
