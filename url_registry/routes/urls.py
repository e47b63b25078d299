from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from url_registry.db.connection import get_db_async
from url_registry.services.url_service import URLService
from url_registry.models.schemas import UrlPayload

url_router = APIRouter()

@url_router.get("/urls")
async def list_urls(session: AsyncSession = Depends(get_db_async)):
    return await URLService.list_urls(session)

@url_router.get("/urls/{url_id}")
async def get_url(url_id: str, session: AsyncSession = Depends(get_db_async)):
    return await URLService.get_url(session, url_id)

@url_router.post("/urls")
async def create_url(payload: UrlPayload, session: AsyncSession = Depends(get_db_async)):
    return await URLService.create_url(session, payload)

@url_router.put("/urls/{url_id}")
async def update_url(url_id: str, payload: UrlPayload, session: AsyncSession = Depends(get_db_async)):
    return await URLService.update_url(session, url_id, payload)

@url_router.delete("/urls/{url_id}")
async def delete_url(url_id: str, session: AsyncSession = Depends(get_db_async)):
    """Soft delete. Deleting an already-deleted record still succeeds."""
    return await URLService.delete_url(session, url_id)
