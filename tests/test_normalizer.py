import pytest

from artsearch.engine import Item, MalformedResponseError, format_item
from artsearch.search import decode_buckets, normalize

from .conftest import hit, response


def test_total_comes_from_engine_not_page_length():
    hits = [hit(str(i), title=f"Item {i}") for i in range(10)]

    result = normalize(response(hits, total=42))

    assert len(result.collection) == 10
    assert result.total == 42


def test_engine_order_is_preserved():
    hits = [hit("c", 3.0), hit("a", 2.0), hit("b", 1.0)]

    result = normalize(response(hits))

    assert [item.id for item in result] == ["c", "a", "b"]
    assert result.collection[0].score == 3.0


def test_legacy_integer_total():
    raw = {"hits": {"total": 7, "hits": []}}

    result = normalize(raw)

    assert result.total == 7
    assert result.is_empty()


def test_missing_hits_block_is_reported():
    with pytest.raises(MalformedResponseError):
        normalize({"took": 1})


def test_missing_total_is_reported():
    with pytest.raises(MalformedResponseError):
        normalize({"hits": {"hits": []}})


def test_hit_without_id_is_not_skipped():
    raw = response([hit("1"), {"_source": {"title": "orphan"}}], total=2)

    with pytest.raises(MalformedResponseError):
        normalize(raw)


def test_hydration_failure_is_reported():
    known = {"1": Item(id="1", source={"title": "Known"})}

    def hydrate(h):
        return known[h["_id"]]

    with pytest.raises(MalformedResponseError, match="#1"):
        normalize(response([hit("1"), hit("2")]), hydrate=hydrate)


def test_custom_hydrator_is_used():
    result = normalize(response([hit("5", title="Five")]), hydrate=lambda h: Item(id="x" + h["_id"]))

    assert result.collection[0].id == "x5"


def test_author_buckets_keep_raw_value():
    raw = {
        "aggregations": {
            "author": {
                "buckets": [
                    {"key": "picasso, pablo", "doc_count": 3},
                    {"key": "Benka, Martin", "doc_count": 1},
                ]
            }
        }
    }

    choices = decode_buckets(raw, "author")

    assert choices[0].value == "picasso, pablo"
    assert choices[0].label == "Pablo Picasso (3)"
    assert choices[0].count == 3
    assert choices[1].label == "Martin Benka (1)"


def test_other_buckets_are_labelled_verbatim():
    raw = {
        "aggregations": {
            "technique": {
                "buckets": [
                    {"key": "oil", "doc_count": 12},
                    {"key": "etching, paper", "doc_count": 4},
                ]
            }
        }
    }

    choices = decode_buckets(raw, "technique")

    assert [c.label for c in choices] == ["oil (12)", "etching, paper (4)"]
    assert [c.value for c in choices] == ["oil", "etching, paper"]


def test_custom_formatter_applies_to_author_only():
    raw = {"aggregations": {"author": {"buckets": [{"key": "a, b", "doc_count": 2}]}}}

    choices = decode_buckets(raw, "author", formatter=str.upper)

    assert choices[0].label == "A, B (2)"
    assert choices[0].value == "a, b"


def test_missing_aggregation_is_reported():
    with pytest.raises(MalformedResponseError):
        decode_buckets({"aggregations": {}}, "author")


def test_response_without_hit_list_is_reported():
    with pytest.raises(MalformedResponseError):
        normalize({"hits": {"total": {"value": 5, "relation": "eq"}}})


def test_hit_list_of_wrong_type_is_reported():
    with pytest.raises(MalformedResponseError):
        normalize({"hits": {"total": 1, "hits": {"_id": "1"}}})


def test_unresolved_hit_is_reported():
    raw = response([hit("1"), hit("2")])

    with pytest.raises(MalformedResponseError, match="did not resolve"):
        normalize(raw, hydrate=lambda h: None)


def test_null_buckets_are_reported():
    with pytest.raises(MalformedResponseError):
        decode_buckets({"aggregations": {"author": {"buckets": None}}}, "author")


def test_non_object_bucket_is_reported():
    raw = {"aggregations": {"technique": {"buckets": ["oil"]}}}

    with pytest.raises(MalformedResponseError):
        decode_buckets(raw, "technique")


def test_format_item_shortens_long_titles():
    item = Item(id="7", source={"title": "Portrét mladej ženy v modrých šatách"}, score=1.5)

    assert item.short_title(20) == "Portrét mladej ženy…"
    assert format_item(item, 20) == "id=7; score=1.5000; title=Portrét mladej ženy…"
    assert Item(id="8", source={"title": "Krajina"}).short_title(20) == "Krajina"
