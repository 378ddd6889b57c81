import os
from typing import Optional

import redis
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    redis_host: str = "redis"
    redis_port: int = 6379
    redis_db: int = 0
    port: int = 8080
    cors_origin: str = "http://localhost:3000"
    seed_on_startup: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Settings":
        """Read settings from the environment.

        A .env file (``env_file``, or the nearest one above the working
        directory) fills in variables that are not already set.
        """
        load_dotenv(env_file or find_dotenv(usecwd=True), override=False)
        return cls(
            redis_host=os.getenv("REDIS_HOST", "redis"),
            redis_port=int(os.getenv("REDIS_PORT", 6379)),
            redis_db=int(os.getenv("REDIS_DB", 0)),
            port=int(os.getenv("PORT", 8080)),
            cors_origin=os.getenv("CORS_ORIGIN", "http://localhost:3000"),
            seed_on_startup=_env_flag("TASKLIST_SEED_ON_STARTUP"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def redis_client(self) -> redis.Redis:
        return redis.Redis(
            host=self.redis_host,
            port=self.redis_port,
            db=self.redis_db,
            decode_responses=True,
        )
