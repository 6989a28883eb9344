from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from sqlalchemy.sql import func

from fridge_chef.database import Base


class Verification(Base):
    """
    One-time-password record for email verification, password reset and
    similar flows.

    Rows with an ``expires_at`` in the past are removed by the
    ``purge-verifications`` CLI command.
    """

    __tablename__ = "verifications"

    id = Column(Integer, primary_key=True)
    type = Column(String(32), nullable=False)  # onboarding|reset-password|change-email
    target = Column(String(255), nullable=False)  # email or username being verified
    secret = Column(String(255), nullable=False)
    algorithm = Column(String(16), nullable=False, default="SHA1")
    digits = Column(Integer, nullable=False, default=6)
    period = Column(Integer, nullable=False, default=30)
    char_set = Column(String(64), nullable=False, default="0123456789")
    expires_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint("target", "type", name="uq_verifications_target_type"),
    )
