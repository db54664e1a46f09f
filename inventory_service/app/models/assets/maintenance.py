# app/models/assets/maintenance.py
import uuid
from sqlalchemy import UUID, Column, ForeignKey, Numeric, String, Text, TIMESTAMP, func
from sqlalchemy.orm import relationship
from shared.core.database import Base
from ...enum.inventory_enum import MaintenanceStatus


class Maintenance(Base):
    __tablename__ = "maintenances"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    asset_id = Column(UUID(as_uuid=True), ForeignKey(
        "assets.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(16), nullable=False)
    status = Column(String(16), nullable=False,
                    default=MaintenanceStatus.SCHEDULED.value)
    scheduled_date = Column(TIMESTAMP(timezone=True), nullable=False)
    completed_date = Column(TIMESTAMP(timezone=True), nullable=True)
    description = Column(Text, nullable=False)
    performed_by = Column(String(200))
    cost = Column(Numeric(14, 2))
    notes = Column(Text)
    user_id = Column(UUID(as_uuid=True), ForeignKey(
        "users.id"), nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    asset = relationship("Asset", back_populates="maintenances")
    user = relationship("Users")
