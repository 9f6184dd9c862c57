#!/usr/bin/env python3
"""Load the station network from stations.json / edges.json into the database.

Replaces the metro_stations and metro_edges tables. The dataset is
validated by building the network first, so a bad file leaves the
tables untouched.

Usage:
    python scripts/seed_network.py
    python scripts/seed_network.py --data-dir data --create-tables
"""

import argparse
import logging
import sys
from pathlib import Path

from core.config import settings
from core.database import SessionLocal, init_db
from src.metro_bc.edge.infrastructure.repositories import EdgeRepository
from src.metro_bc.routing.network import build_network
from src.metro_bc.routing.network_source import read_json_dataset
from src.metro_bc.shared.domain.exceptions import NetworkIntegrityError
from src.metro_bc.station.infrastructure.repositories import StationRepository

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description='Seed metro stations and edges')
    parser.add_argument('--data-dir', type=str, default=settings.NETWORK_DATA_DIR,
                        help='Directory with stations.json and edges.json')
    parser.add_argument('--create-tables', action='store_true',
                        help='Create missing tables first (development only)')
    args = parser.parse_args()

    data_dir = Path(args.data_dir)
    logger.info(f"Reading network dataset from {data_dir}")

    try:
        dataset = read_json_dataset(data_dir)
        network = build_network(dataset.stations, dataset.edges)
    except NetworkIntegrityError as e:
        logger.error(f"Invalid network dataset: {e}")
        sys.exit(1)

    logger.info(f"Dataset valid: {len(dataset.stations)} stations, {len(dataset.edges)} edges, "
                f"{network.node_count} nodes")

    if args.create_tables:
        init_db()

    db = SessionLocal()
    try:
        stations = StationRepository(db).replace_all(dataset.stations, commit=False)
        edges = EdgeRepository(db).replace_all(dataset.edges, commit=False)
        db.commit()
        logger.info(f"Seeded {stations} stations and {edges} edges")
    except Exception as e:
        db.rollback()
        logger.error(f"Seeding failed: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
