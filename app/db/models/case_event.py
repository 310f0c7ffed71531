from sqlalchemy import Column, Text, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base


class CaseEvent(Base):
    """Legacy log of case date changes, written by a trigger on `cases`."""
    __tablename__ = "case_events"

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=func.gen_random_uuid())
    case_id = Column(UUID(as_uuid=True), ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True)
    field = Column(Text, nullable=False)
    old_date = Column(DateTime(timezone=True), nullable=True)
    new_date = Column(DateTime(timezone=True), nullable=False)
    changed_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    changed_by = Column(UUID(as_uuid=True), nullable=True)

    case = relationship("Case", back_populates="events")

    __table_args__ = (
        CheckConstraint("field IN ('previous_date', 'next_date')", name="ck_case_events_field"),
    )
