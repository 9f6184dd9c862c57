from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from core.database import BaseRepository
from src.metro_bc.station.domain.entities import Station
from src.metro_bc.station.infrastructure.models import StationModel


class StationRepository(BaseRepository[StationModel]):
    """Read access to the station dataset."""

    def __init__(self, session: Session):
        super().__init__(session, StationModel)

    def list_stations(self) -> List[Station]:
        models = self.session.query(StationModel).order_by(StationModel.station_id).all()
        return [m.to_entity() for m in models]

    def get_station(self, station_id: str) -> Optional[Station]:
        model = self.get_by_id(station_id)
        return model.to_entity() if model else None

    def replace_all(self, stations: Iterable[Station], commit: bool = True) -> int:
        """Replace the whole dataset (used by the seed script).

        With commit=False the change is only flushed, so the caller can
        replace stations and edges in one transaction.
        """
        self.session.query(StationModel).delete()
        count = 0
        for station in stations:
            self.session.add(StationModel.from_entity(station))
            count += 1
        if commit:
            self.session.commit()
        else:
            self.session.flush()
        return count
