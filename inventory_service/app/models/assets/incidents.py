# app/models/assets/incidents.py
import uuid
from sqlalchemy import UUID, Column, ForeignKey, Numeric, String, Text, TIMESTAMP, func
from sqlalchemy.orm import relationship
from shared.core.database import Base
from ...enum.inventory_enum import IncidentStatus


class Incident(Base):
    __tablename__ = "incidents"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    asset_id = Column(UUID(as_uuid=True), ForeignKey(
        "assets.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(24), nullable=False)
    status = Column(String(16), nullable=False,
                    default=IncidentStatus.REPORTED.value)
    description = Column(Text, nullable=False)
    reported_by_id = Column(UUID(as_uuid=True), ForeignKey(
        "users.id"), nullable=False)
    reported_date = Column(TIMESTAMP(timezone=True),
                           server_default=func.now(), nullable=False)
    resolved_date = Column(TIMESTAMP(timezone=True), nullable=True)
    resolution = Column(Text)
    cost = Column(Numeric(14, 2))
    notes = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    asset = relationship("Asset", back_populates="incidents")
    reported_by = relationship("Users")
