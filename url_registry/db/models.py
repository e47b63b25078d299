from sqlalchemy import Column, String, Boolean, DateTime, JSON, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import expression, func
from url_registry.db.connection import Base

# jsonb on PostgreSQL, plain JSON on the SQLite test database
SubUrlsType = JSON().with_variant(JSONB(), "postgresql")


class UrlRecord(Base):
    __tablename__ = "urls"
    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    main_url = Column(String, nullable=False)
    sub_urls = Column(SubUrlsType, nullable=False, default=dict, server_default=text("'{}'"))
    is_deleted = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    deleted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now())

    def __repr__(self):
        return f"<UrlRecord(id={self.id}, name={self.name}, is_deleted={self.is_deleted})>"
