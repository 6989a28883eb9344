from sqlalchemy import Column, Integer, String, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from fridge_chef.database import Base


class Password(Base):
    """Bcrypt password hash, at most one per user."""

    __tablename__ = "passwords"

    id = Column(Integer, primary_key=True)
    hash = Column(String(255), nullable=False)
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    user = relationship("User", back_populates="password")
