from sqlalchemy import Column, String, Float, Integer

from core.base import Base
from src.metro_bc.station.domain.entities import Station


class StationModel(Base):
    """SQLAlchemy model for a metro station."""

    __tablename__ = "metro_stations"

    station_id = Column(String(100), primary_key=True)
    name = Column(String(255), nullable=False, index=True)
    longitude = Column(Float, nullable=False)
    latitude = Column(Float, nullable=False)
    lines = Column(String(500), nullable=True)  # Comma-separated line ids
    entry_count = Column(Integer, nullable=True)

    @property
    def line_list(self) -> list:
        if not self.lines:
            return []
        return [line.strip() for line in self.lines.split(",") if line.strip()]

    def to_entity(self) -> Station:
        return Station(
            station_id=self.station_id,
            name=self.name,
            longitude=float(self.longitude),
            latitude=float(self.latitude),
            lines=tuple(self.line_list),
            entry_count=self.entry_count,
        )

    @classmethod
    def from_entity(cls, station: Station) -> "StationModel":
        return cls(
            station_id=station.station_id,
            name=station.name,
            longitude=station.longitude,
            latitude=station.latitude,
            lines=",".join(station.lines) or None,
            entry_count=station.entry_count,
        )
