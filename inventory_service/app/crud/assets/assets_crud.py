# app/crud/assets/assets_crud.py
import logging
from typing import Optional
from uuid import UUID
from datetime import datetime, timezone
from dateutil.relativedelta import relativedelta
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from shared.core.database import atomic
from shared.core.exceptions import ConflictError, InvalidInputError, InvalidStateError, NotFoundError
from ...enum.inventory_enum import AssetStatus
from ...models.assets.asset_category import AssetCategory
from ...models.assets.asset_movements import AssetMovement
from ...models.assets.assets import Asset
from ...schemas.assets.assets_schemas import (
    AssetCreate, AssetOut, AssetStats, AssetStatusChange, AssetUpdate, AssetsRequest, AssetsResponse)

logger = logging.getLogger(__name__)

# fields inherited from the category when the caller leaves them empty
INHERITED_FIELDS = {
    "acquisition_cost": "default_cost",
    "useful_life": "default_useful_life",
    "residual_value": "default_residual_value",
}


# ----------------------------------------------------------------------
# LOOKUPS
# ----------------------------------------------------------------------

def get_asset_or_404(db: Session, asset_id: UUID) -> Asset:
    asset = db.query(Asset).filter(Asset.id == asset_id).first()
    if not asset:
        raise NotFoundError("Asset", asset_id)
    return asset


def lock_asset(db: Session, asset_id: UUID) -> Asset:
    """Load an asset with a row lock held until the surrounding transaction ends."""
    asset = (
        db.query(Asset)
        .filter(Asset.id == asset_id)
        .with_for_update()
        .first()
    )
    if not asset:
        raise NotFoundError("Asset", asset_id)
    return asset


# ----------------------------------------------------------------------
# CRUD OPERATIONS
# ----------------------------------------------------------------------

def build_asset_filters(params: AssetsRequest):
    filters = []

    if params.search:
        search_term = f"%{params.search}%"
        filters.append(or_(
            Asset.code.ilike(search_term),
            Asset.name.ilike(search_term),
            Asset.description.ilike(search_term),
        ))

    if params.category_id:
        filters.append(Asset.category_id == params.category_id)

    if params.status:
        filters.append(Asset.status == params.status.value)

    if params.building:
        filters.append(Asset.building.ilike(f"%{params.building}%"))

    if params.office:
        filters.append(Asset.office.ilike(f"%{params.office}%"))

    if params.laboratory:
        filters.append(Asset.laboratory.ilike(f"%{params.laboratory}%"))

    return filters


def get_assets(db: Session, params: AssetsRequest) -> AssetsResponse:
    base_query = db.query(Asset).filter(*build_asset_filters(params))
    total = base_query.with_entities(func.count(Asset.id)).scalar()

    results = (
        base_query
        .options(joinedload(Asset.category), joinedload(Asset.assigned_to))
        .order_by(Asset.created_at.desc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    assets = [AssetOut.model_validate(a) for a in results]
    return AssetsResponse(assets=assets, total=total)


def get_asset_by_id(db: Session, asset_id: UUID) -> AssetOut:
    return AssetOut.model_validate(get_asset_or_404(db, asset_id))


def get_asset_by_code(db: Session, code: str) -> AssetOut:
    asset = db.query(Asset).filter(Asset.code == code).first()
    if not asset:
        raise NotFoundError("Asset", code, f"Asset with code '{code}' not found")
    return AssetOut.model_validate(asset)


def _inherit_category_defaults(db: Session, category: AssetCategory, values: dict) -> dict:
    parent = None
    if category.parent_id:
        parent = db.query(AssetCategory).filter(
            AssetCategory.id == category.parent_id).first()

    for field, default_field in INHERITED_FIELDS.items():
        if values.get(field) is not None:
            continue
        value = getattr(category, default_field)
        if value is None and parent is not None:
            value = getattr(parent, default_field)
        if value is not None:
            values[field] = value
    return values


def create_asset(db: Session, asset: AssetCreate, created_by_id: UUID) -> AssetOut:
    existing = db.query(Asset).filter(Asset.code == asset.code).first()
    if existing:
        raise ConflictError(f"Asset with code '{asset.code}' already exists")

    category = db.query(AssetCategory).filter(
        AssetCategory.id == asset.category_id).first()
    if not category:
        raise NotFoundError("Category", asset.category_id)

    values = asset.model_dump()
    values["status"] = asset.status.value
    if values["status"] == AssetStatus.IN_USE.value:
        # custody only exists through an assignment
        raise InvalidStateError(
            "New assets cannot start in use", current=values["status"])
    values = _inherit_category_defaults(db, category, values)

    with atomic(db):
        db_asset = Asset(**values, created_by_id=created_by_id)
        db.add(db_asset)

    db.refresh(db_asset)
    logger.info("Asset %s (%s) created by %s",
                db_asset.id, db_asset.code, created_by_id)
    return AssetOut.model_validate(db_asset)


def update_asset(db: Session, asset_id: UUID, asset: AssetUpdate) -> AssetOut:
    db_asset = get_asset_or_404(db, asset_id)
    update_data = asset.model_dump(exclude_unset=True)

    code = update_data.pop("code", None)
    if code is not None and code != db_asset.code:
        raise InvalidInputError("Asset code cannot be changed")

    if "name" in update_data and update_data["name"] is None:
        raise InvalidInputError("Asset name cannot be empty")

    if update_data.get("category_id"):
        category = db.query(AssetCategory).filter(
            AssetCategory.id == update_data["category_id"]).first()
        if not category:
            raise NotFoundError("Category", update_data["category_id"])
    elif "category_id" in update_data:
        update_data.pop("category_id")

    with atomic(db):
        for key, value in update_data.items():
            setattr(db_asset, key, value)

    db.refresh(db_asset)
    return AssetOut.model_validate(db_asset)


def change_asset_status(db: Session, asset_id: UUID, change: AssetStatusChange, actor_id: UUID) -> AssetOut:
    new_status = change.status.value

    with atomic(db):
        db_asset = lock_asset(db, asset_id)

        if new_status == AssetStatus.IN_USE.value:
            raise InvalidStateError(
                "Use an assignment to put an asset in use", current=db_asset.status)

        if db_asset.status == AssetStatus.DECOMMISSIONED.value and new_status != db_asset.status:
            raise InvalidStateError(
                "A decommissioned asset can only come back through an entry movement",
                current=db_asset.status)

        if new_status == AssetStatus.DECOMMISSIONED.value and db_asset.assigned_to_id:
            raise InvalidStateError(
                "Return the asset before decommissioning it",
                current=db_asset.status, required="unassigned")

        if new_status == AssetStatus.AVAILABLE.value and db_asset.assigned_to_id:
            # an assigned asset coming back from repair stays with its holder
            new_status = AssetStatus.IN_USE.value

        db_asset.status = new_status

    db.refresh(db_asset)
    logger.info("Asset %s status set to %s by %s",
                asset_id, db_asset.status, actor_id)
    return AssetOut.model_validate(db_asset)


def delete_asset(db: Session, asset_id: UUID) -> Optional[AssetOut]:
    with atomic(db):
        db_asset = lock_asset(db, asset_id)
        if db_asset.status != AssetStatus.DECOMMISSIONED.value:
            raise InvalidStateError(
                "Only decommissioned assets can be deleted",
                current=db_asset.status,
                required=AssetStatus.DECOMMISSIONED.value)
        ledger_rows = db.query(func.count(AssetMovement.id)).filter(
            AssetMovement.asset_id == asset_id).scalar()
        if ledger_rows:
            logger.warning("Delete refused for asset %s with %s ledger rows", asset_id, ledger_rows)
            raise ConflictError(
                f"Asset has {ledger_rows} inventory movements and cannot be deleted")
        # assignments, maintenances and incidents cascade
        db.delete(db_asset)

    logger.info("Asset %s deleted", asset_id)
    return None


def get_asset_stats(db: Session) -> AssetStats:
    now = datetime.now(timezone.utc)
    month_ago = now - relativedelta(months=1)

    total = db.query(func.count(Asset.id)).scalar() or 0

    by_status = {status.value: 0 for status in AssetStatus}
    for status, count in (
        db.query(Asset.status, func.count(Asset.id))
        .group_by(Asset.status)
        .all()
    ):
        by_status[status] = count

    total_value = db.query(
        func.coalesce(func.sum(Asset.acquisition_cost), 0)).scalar()

    created_last_month = (
        db.query(func.count(Asset.id))
        .filter(Asset.created_at >= month_ago)
        .scalar()
    ) or 0

    recent = (
        db.query(Asset)
        .options(joinedload(Asset.category))
        .order_by(Asset.created_at.desc())
        .limit(5)
        .all()
    )

    return AssetStats(
        total=total,
        by_status=by_status,
        total_value=float(total_value or 0),
        created_last_month=created_last_month,
        recent_assets=[AssetOut.model_validate(a) for a in recent],
    )
