import pytest

from grepai.hybrid import reciprocal_rank_fusion, text_search, tokenize
from grepai.store import Chunk, SearchResult


@pytest.fixture
def chunks():
    return [
        Chunk(id="1", content="function handleLogin(user, password) { return auth(user); }"),
        Chunk(id="2", content="function handleLogout() { session.clear(); }"),
        Chunk(id="3", content="const user = { name: 'test', email: 'test@example.com' };"),
        Chunk(id="4", content="function validateEmail(email) { return email.includes('@'); }"),
    ]


def test_text_search_single_word(chunks):
    results = text_search(chunks, "login", 10)
    assert len(results) == 1
    assert results[0].chunk.id == "1"


def test_text_search_multiple_words_best_first(chunks):
    results = text_search(chunks, "user email", 10)
    assert len(results) == 3
    assert results[0].chunk.id == "3"
    assert results[0].score == 1.0


def test_text_search_no_match(chunks):
    assert text_search(chunks, "database connection", 10) == []


def test_text_search_limit(chunks):
    results = text_search(chunks, "user email", 2)
    assert len(results) == 2
    assert results[0].chunk.id == "3"


def test_text_search_empty_query():
    assert text_search([Chunk(id="1", content="some content")], "", 10) == []


def _results(*ids):
    return [SearchResult(chunk=Chunk(id=i), score=0.5) for i in ids]


def test_reciprocal_rank_fusion():
    list1 = _results("a", "b", "c")
    list2 = _results("b", "d", "a")
    results = reciprocal_rank_fusion(60, 10, list1, list2)
    assert len(results) == 4
    assert results[0].chunk.id == "b"
    assert results[1].chunk.id == "a"


def test_reciprocal_rank_fusion_limit():
    results = reciprocal_rank_fusion(60, 2, _results("a", "b", "c"))
    assert len(results) == 2


def test_reciprocal_rank_fusion_empty_lists():
    assert reciprocal_rank_fusion(60, 10) == []


def test_reciprocal_rank_fusion_single_list_keeps_order():
    results = reciprocal_rank_fusion(60, 0, _results("x", "y", "z"))
    assert [r.chunk.id for r in results] == ["x", "y", "z"]
    assert results[0].score > results[1].score > results[2].score


@pytest.mark.parametrize(
    "query, expected",
    [
        ("hello world", ["hello", "world"]),
        ("UPPER CASE", ["upper", "case"]),
        ("a b c", []),
        ("the user login", ["the", "user", "login"]),
        ("", []),
    ],
)
def test_tokenize(query, expected):
    assert tokenize(query) == expected