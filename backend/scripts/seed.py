# scripts/seed.py

import logging

from dashboard.config import settings
from dashboard.database import get_engine, get_sessionmaker, init_db
from dashboard.services.image_service import ImageStore
from dashboard.services.seed_service import seed_database
from dashboard.utils.filesystem import ensure_data_dirs

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


def main():
    ensure_data_dirs()
    init_db(settings.db_path)
    engine = get_engine(settings.db_path)
    db = get_sessionmaker(engine)()
    try:
        counts = seed_database(db, ImageStore(settings.upload_dir, settings.uploads_url))
    finally:
        db.close()
        engine.dispose()
    logger.info("Seed complete (%s)", ", ".join(f"{k}={v}" for k, v in counts.items()))


if __name__ == "__main__":
    main()
