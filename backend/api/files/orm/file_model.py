"""File ORM model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from database import Base


class FileModel(Base):
    __tablename__ = "files"

    id = Column(String, primary_key=True)
    storage_key = Column(String, unique=True, nullable=False, index=True)
    original_name = Column(String, nullable=False)
    size_bytes = Column(Integer, nullable=False, default=0)
    mime_type = Column(String, nullable=True)
    password = Column(String, nullable=True)
    expires_at = Column(DateTime, nullable=True, index=True)
    max_downloads = Column(Integer, nullable=True)
    download_count = Column(Integer, nullable=False, default=0)
    owner_user_id = Column(
        String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_at = Column(DateTime, default=func.now(), index=True)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
