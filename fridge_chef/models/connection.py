from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from fridge_chef.database import Base


class Connection(Base):
    """Link between a user and an external identity provider account."""

    __tablename__ = "connections"

    id = Column(Integer, primary_key=True)
    provider_name = Column(String(64), nullable=False)  # e.g. "github"
    provider_id = Column(String(255), nullable=False)
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="connections")

    __table_args__ = (
        UniqueConstraint(
            "provider_name", "provider_id", name="uq_connections_provider"
        ),
    )
