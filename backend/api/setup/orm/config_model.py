"""Config ORM model."""

from sqlalchemy import Column, String

from database import Base


class ConfigModel(Base):
    __tablename__ = "config"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False, default="")
