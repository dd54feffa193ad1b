"""
Remplit la base configurée (Settings) avec les projets de démonstration.

    python scripts/seed.py            # seulement si la base est vide
    python scripts/seed.py --force    # remplace tout
"""

import argparse
from pathlib import Path

from projectboard.core.config import settings
from projectboard.core.logging import setup_logging
from projectboard.db.seed import seed_all
from projectboard.db.session import build_engine
from projectboard.db.store import ProjectStore


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed des projets de démonstration")
    parser.add_argument("--seed-path", default=str(Path(__file__).with_name("seed_data.yaml")))
    parser.add_argument("--force", action="store_true", help="remplace toutes les données existantes")
    args = parser.parse_args()

    setup_logging(level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)

    engine = build_engine(settings.DATABASE_URL, echo=False)
    store = ProjectStore(engine)
    store.init_schema()
    seed_all(store, args.seed_path, force=args.force)
    engine.dispose()


if __name__ == "__main__":
    main()
