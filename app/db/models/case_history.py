from sqlalchemy import Column, Text, Date, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID, ARRAY
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base


class CaseHistory(Base):
    """Manual and trigger-written history entries of a case."""
    __tablename__ = "case_history"

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=func.gen_random_uuid())
    case_id = Column(UUID(as_uuid=True), ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True)
    event_date = Column(Date, nullable=True)
    action = Column(Text, nullable=False)
    stage_change = Column(Text, nullable=True)
    document_links = Column(ARRAY(Text), nullable=True)
    # Storage keys in the case-documents bucket, not URLs
    document_files = Column(ARRAY(Text), nullable=True)
    notes = Column(Text, nullable=True)
    source = Column(Text, nullable=False, server_default="manual")
    created_by = Column(UUID(as_uuid=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    case = relationship("Case", back_populates="history")

    __table_args__ = (
        CheckConstraint("source IN ('manual', 'system')", name="ck_case_history_source"),
    )
