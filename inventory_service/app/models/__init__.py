# Import all models to ensure they are registered with SQLAlchemy
from shared.models.users import Users
from .assets.asset_category import AssetCategory
from .assets.assets import Asset
from .assets.asset_assignments import AssetAssignment
from .assets.asset_movements import AssetMovement
from .assets.maintenance import Maintenance
from .assets.incidents import Incident
