from sqlalchemy import Column, String, Float, Integer

from core.base import Base
from src.metro_bc.edge.domain.entities import Edge


class EdgeModel(Base):
    """SQLAlchemy model for a network edge.

    Station ids are plain strings: an edge may reference a station
    without a metro_stations row.
    """

    __tablename__ = "metro_edges"

    id = Column(Integer, primary_key=True, autoincrement=True)
    from_station_id = Column(String(100), nullable=False, index=True)
    to_station_id = Column(String(100), nullable=False, index=True)
    weight = Column(Float, nullable=False)
    line = Column(String(50), nullable=True)

    def to_entity(self) -> Edge:
        return Edge(
            from_station_id=self.from_station_id,
            to_station_id=self.to_station_id,
            weight=self.weight,
            line=self.line,
        )

    @classmethod
    def from_entity(cls, edge: Edge) -> "EdgeModel":
        return cls(
            from_station_id=edge.from_station_id,
            to_station_id=edge.to_station_id,
            weight=edge.weight,
            line=edge.line,
        )
