# app/models/assets/asset_movements.py
import uuid
from sqlalchemy import UUID, Column, ForeignKey, Integer, Numeric, String, Text, TIMESTAMP, func
from sqlalchemy.orm import relationship
from shared.core.database import Base


class AssetMovement(Base):
    """Append-only inventory ledger row. Never updated or deleted."""
    __tablename__ = "asset_movements"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    asset_id = Column(UUID(as_uuid=True), ForeignKey(
        "assets.id", ondelete="RESTRICT"), nullable=False, index=True)
    type = Column(String(16), nullable=False)            # ENTRADA / SALIDA
    movement_type = Column(String(32), nullable=False)   # subtype
    description = Column(String(500), nullable=False)
    cost = Column(Numeric(14, 2))
    quantity = Column(Integer, nullable=False, default=1)
    user_id = Column(UUID(as_uuid=True), ForeignKey(
        "users.id"), nullable=False)
    date = Column(TIMESTAMP(timezone=True),
                  server_default=func.now(), nullable=False)
    notes = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    asset = relationship("Asset", back_populates="movements")
    user = relationship("Users")
