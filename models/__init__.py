# Models registry for Alembic autogenerate
# Import all SQLAlchemy models here so Alembic can detect them

# Network models
from src.metro_bc.station.infrastructure.models import StationModel
from src.metro_bc.edge.infrastructure.models import EdgeModel

# Community report models
from src.metro_bc.report.infrastructure.models import CrowdReportModel

__all__ = [
    "StationModel",
    "EdgeModel",
    "CrowdReportModel",
]
