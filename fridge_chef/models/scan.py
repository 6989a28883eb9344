from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from fridge_chef.database import Base


class Scan(Base):
    """A capture event: the detected ingredient text plus the photos taken."""

    __tablename__ = "scans"

    id = Column(Integer, primary_key=True)
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    ingredients = Column(Text, nullable=False)  # Raw detector output
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="scans")
    images = relationship(
        "ScanImage", back_populates="scan", cascade="all, delete-orphan"
    )
    # Recipes outlive their scan; the foreign key is nulled instead
    recipes = relationship("Recipe", back_populates="scan")

    __table_args__ = (Index("idx_scans_user_id", "user_id"),)
