import logging
import random
from datetime import datetime, timezone
from typing import Optional

from tasklist.config import Settings
from tasklist.logging_setup import setup_logging
from tasklist.models import Color
from tasklist.store import RedisTaskStore

logger = logging.getLogger(__name__)

COMPLETED_RATIO = 0.3


def seed(store: RedisTaskStore, count: int = 20, rng: Optional[random.Random] = None) -> int:
    """Fill an empty store with sample tasks; returns how many were created."""
    if store.count() > 0:
        logger.info("Tasks already exist, skipping seed.")
        return 0
    rng = rng or random.Random()
    colors = list(Color)
    now = datetime.now(timezone.utc)
    created = store.create_many(
        {
            "title": f"Task {i + 1}",
            "color": rng.choice(colors),
            "completed": now if rng.random() < COMPLETED_RATIO else None,
        }
        for i in range(count)
    )
    logger.info("Seeded %d tasks", created)
    return created


def main() -> None:
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    client = settings.redis_client()
    try:
        seed(RedisTaskStore(client))
    finally:
        client.close()


if __name__ == "__main__":
    main()
