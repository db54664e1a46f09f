# app/models/assets/asset_assignments.py
import uuid
from sqlalchemy import UUID, Column, ForeignKey, Index, String, Text, TIMESTAMP, func, text
from sqlalchemy.orm import relationship
from shared.core.database import Base
from ...enum.inventory_enum import AssignmentStatus


class AssetAssignment(Base):
    __tablename__ = "asset_assignments"
    __table_args__ = (
        # at most one ACTIVE custody row per asset, enforced by the database
        Index(
            "uix_asset_active_assignment",
            "asset_id",
            unique=True,
            postgresql_where=text("status = 'ACTIVE'"),
            sqlite_where=text("status = 'ACTIVE'"),
        ),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    asset_id = Column(UUID(as_uuid=True), ForeignKey(
        "assets.id", ondelete="CASCADE"), nullable=False, index=True)
    assigned_to_id = Column(UUID(as_uuid=True), ForeignKey(
        "users.id"), nullable=False, index=True)
    assigned_by_id = Column(UUID(as_uuid=True), ForeignKey(
        "users.id"), nullable=False)
    status = Column(String(16), nullable=False,
                    default=AssignmentStatus.ACTIVE.value)
    assigned_at = Column(TIMESTAMP(timezone=True),
                         server_default=func.now(), nullable=False)
    returned_at = Column(TIMESTAMP(timezone=True), nullable=True)
    location = Column(String(200))
    reason = Column(String(500))
    notes = Column(Text)

    asset = relationship("Asset", back_populates="assignments")
    assigned_to = relationship("Users", foreign_keys=[assigned_to_id])
    assigned_by = relationship("Users", foreign_keys=[assigned_by_id])
