from sqlalchemy import Column, Text, DateTime, Enum as SQLEnum, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base
from app.schemas.case import CaseStatus


class Case(Base):
    __tablename__ = "cases"

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=func.gen_random_uuid())
    previous_date = Column(DateTime(timezone=True), nullable=False)
    next_date = Column(DateTime(timezone=True), nullable=False)
    status = Column(SQLEnum(CaseStatus, name="case_status"), nullable=False, server_default=CaseStatus.pending.value)
    case_details = Column(Text, nullable=False)
    # auth.users lives in Supabase's own schema
    user_id = Column(UUID(as_uuid=True), nullable=False)
    team_id = Column(UUID(as_uuid=True), ForeignKey("teams.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    team = relationship("Team", back_populates="cases")
    history = relationship("CaseHistory", back_populates="case", cascade="all, delete-orphan")
    events = relationship("CaseEvent", back_populates="case", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_cases_user_id_next_date", "user_id", "next_date"),
    )
