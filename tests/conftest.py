import fakeredis
import pytest
from fastapi.testclient import TestClient

from tasklist.config import Settings
from tasklist.main import create_app
from tasklist.store import RedisTaskStore


@pytest.fixture()
def redis_client():
    client = fakeredis.FakeRedis(decode_responses=True)
    yield client
    client.flushall()


@pytest.fixture()
def store(redis_client):
    store = RedisTaskStore(redis_client)
    store.delete_many()
    return store


@pytest.fixture()
def client(store):
    app = create_app(settings=Settings(), store=store)
    with TestClient(app) as c:
        yield c
