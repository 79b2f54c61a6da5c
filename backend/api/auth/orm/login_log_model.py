"""Login attempt ORM model."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, func

from database import Base


class LoginLogModel(Base):
    __tablename__ = "login_logs"

    id = Column(String, primary_key=True)
    user_id = Column(
        String, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True
    )
    username = Column(String, nullable=False)
    ip_address = Column(String, nullable=True)
    user_agent = Column(String, nullable=True)
    success = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=func.now(), index=True)
