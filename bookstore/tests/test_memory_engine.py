import pytest

from bookstore.percolator.errors import UnsupportedQueryError
from bookstore.percolator.memory import InMemoryMatchingEngine, matches

COLLECTION = "percolator_index"


def test_register_then_evaluate_is_immediate():
    engine = InMemoryMatchingEngine()
    engine.register_query(COLLECTION, "cheap", {"bool": {"filter": [{"range": {"sellingPrice": {"lte": 9.99}}}]}})
    assert engine.evaluate_document(COLLECTION, {"sellingPrice": 5.0}) == {"cheap"}
    assert engine.evaluate_document(COLLECTION, {"sellingPrice": 15.99}) == set()


def test_collections_are_separate():
    engine = InMemoryMatchingEngine()
    engine.register_query("a", "q1", {"match_all": {}})
    assert engine.evaluate_document("a", {}) == {"q1"}
    assert engine.evaluate_document("b", {}) == set()


def test_extra_fields_are_stored_but_not_matched():
    engine = InMemoryMatchingEngine()
    engine.register_query(
        COLLECTION,
        "q1",
        {"bool": {}},
        extra={"email": "reader@example.com", "title": "Anything"},
    )
    stored = engine.get_registration(COLLECTION, "q1")
    assert stored == {"email": "reader@example.com", "title": "Anything", "query": {"bool": {}}}
    assert engine.evaluate_document(COLLECTION, {"author": "Whoever"}) == {"q1"}


def test_reregistering_replaces_query():
    engine = InMemoryMatchingEngine()
    engine.register_query(COLLECTION, "q1", {"term": {"author": "A"}})
    engine.register_query(COLLECTION, "q1", {"term": {"author": "B"}})
    assert engine.evaluate_document(COLLECTION, {"author": "A"}) == set()
    assert engine.evaluate_document(COLLECTION, {"author": "B"}) == {"q1"}


def test_delete_query():
    engine = InMemoryMatchingEngine()
    engine.register_query(COLLECTION, "q1", {"match_all": {}})
    engine.delete_query(COLLECTION, "q1")
    engine.delete_query(COLLECTION, "never-registered")
    assert engine.evaluate_document(COLLECTION, {}) == set()
    assert engine.get_registration(COLLECTION, "q1") is None


def test_missing_field_never_matches_term_or_range():
    assert not matches({"term": {"author": "A"}}, {})
    assert not matches({"range": {"sellingPrice": {"gte": 1}}}, {})


def test_term_accepts_value_object():
    assert matches({"term": {"author": {"value": "A"}}}, {"author": "A"})


def test_multi_valued_document_field():
    assert matches({"terms": {"bookType": ["POETRY"]}}, {"bookType": ["FICTION", "POETRY"]})


def test_bool_should_and_must_not():
    query = {
        "bool": {
            "should": [{"term": {"author": "A"}}, {"term": {"author": "B"}}],
            "must_not": [{"term": {"bookLanguage": "FRENCH"}}],
        }
    }
    assert matches(query, {"author": "A", "bookLanguage": "ENGLISH"})
    assert not matches(query, {"author": "C", "bookLanguage": "ENGLISH"})
    assert not matches(query, {"author": "B", "bookLanguage": "FRENCH"})


def test_exclusive_range_bounds():
    query = {"range": {"sellingPrice": {"gt": 1.0, "lt": 2.0}}}
    assert matches(query, {"sellingPrice": 1.5})
    assert not matches(query, {"sellingPrice": 1.0})
    assert not matches(query, {"sellingPrice": 2.0})


def test_unsupported_query_raises():
    engine = InMemoryMatchingEngine()
    engine.register_query(COLLECTION, "q1", {"match": {"author": "A"}})
    with pytest.raises(UnsupportedQueryError):
        engine.evaluate_document(COLLECTION, {"author": "A"})


def test_minimum_should_match_count():
    query = {
        "bool": {
            "should": [{"term": {"author": "A"}}, {"term": {"bookType": "POETRY"}}],
            "minimum_should_match": 2,
        }
    }
    assert matches(query, {"author": "A", "bookType": "POETRY"})
    assert not matches(query, {"author": "A", "bookType": "FICTION"})

    all_but_one = {"bool": {**query["bool"], "minimum_should_match": "-1"}}
    assert matches(all_but_one, {"author": "A", "bookType": "FICTION"})


def test_percentage_minimum_should_match_is_unsupported():
    query = {
        "bool": {
            "should": [{"term": {"author": "A"}}, {"term": {"author": "B"}}],
            "minimum_should_match": "50%",
        }
    }
    with pytest.raises(UnsupportedQueryError):
        matches(query, {"author": "A"})
