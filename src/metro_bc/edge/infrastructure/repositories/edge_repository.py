from typing import Iterable, List

from sqlalchemy.orm import Session

from core.database import BaseRepository
from src.metro_bc.edge.domain.entities import Edge
from src.metro_bc.edge.infrastructure.models import EdgeModel


class EdgeRepository(BaseRepository[EdgeModel]):
    """Read access to the edge dataset."""

    def __init__(self, session: Session):
        super().__init__(session, EdgeModel)

    def list_edges(self) -> List[Edge]:
        models = self.session.query(EdgeModel).order_by(EdgeModel.id).all()
        return [m.to_entity() for m in models]

    def replace_all(self, edges: Iterable[Edge], commit: bool = True) -> int:
        """Replace the whole dataset (used by the seed script).

        With commit=False the change is only flushed, so the caller can
        replace stations and edges in one transaction.
        """
        self.session.query(EdgeModel).delete()
        count = 0
        for edge in edges:
            self.session.add(EdgeModel.from_entity(edge))
            count += 1
        if commit:
            self.session.commit()
        else:
            self.session.flush()
        return count
