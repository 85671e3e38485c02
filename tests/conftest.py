import json

import httpx
import pytest

from artsearch.engine import LocaleResolver, SearchEngineClient
from artsearch.search import ItemSearchService, SearchServiceConfig


def hit(doc_id, score=1.0, **source):
    return {"_index": "items_sk", "_id": doc_id, "_score": score, "_source": source}


def response(hits, total=None, aggregations=None):
    body = {
        "took": 3,
        "timed_out": False,
        "hits": {
            "total": {"value": len(hits) if total is None else total, "relation": "eq"},
            "max_score": 1.0,
            "hits": hits,
        },
    }
    if aggregations is not None:
        body["aggregations"] = aggregations
    return body


class Recorder:
    """Mock engine: records every request and answers with a canned payload."""

    def __init__(self, payload=None, status_code=200):
        self.payload = response([]) if payload is None else payload
        self.status_code = status_code
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last(self):
        return self.requests[-1]

    @property
    def last_body(self):
        return json.loads(self.last.content)


@pytest.fixture
def engine():
    return Recorder()


@pytest.fixture
def make_client():
    clients = []

    def factory(handler):
        client = SearchEngineClient(
            "http://es.test", timeout=2.0, transport=httpx.MockTransport(handler)
        )
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()


@pytest.fixture
def service(engine, make_client):
    return ItemSearchService(
        SearchServiceConfig(index="items"),
        client=make_client(engine),
        locales=LocaleResolver(["sk", "cs", "en"], "sk"),
    )
