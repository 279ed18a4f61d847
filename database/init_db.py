import logging
from sqlalchemy import text
from sqlalchemy.engine import Engine
from tenacity import retry, stop_after_attempt, wait_fixed

from database.models import Base

logger = logging.getLogger(__name__)


@retry(stop=stop_after_attempt(5), wait=wait_fixed(2))
def init_db(engine: Engine):
    logger.info("Initializing database...")
    try:
        # Fail fast (and retry) while the server is still starting
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
            logger.info("Database reachable.")

        Base.metadata.create_all(bind=engine)
        logger.info("Tables created or verified.")

    except Exception as e:
        logger.error(f"Error initializing DB: {e}")
        raise


if __name__ == "__main__":
    from core.config_loader import load_config
    from database.database import build_engine

    logging.basicConfig(level=logging.INFO)
    init_db(build_engine(load_config().database))
