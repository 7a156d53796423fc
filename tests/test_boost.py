import pytest

from grepai.boost import (
    BoostConfig,
    BoostRule,
    apply_boost,
    compute_boost_factor,
    matches_pattern,
)
from grepai.store import Chunk, SearchResult


def _result(path, score):
    return SearchResult(chunk=Chunk(file_path=path), score=score)


def test_apply_boost_disabled_keeps_order():
    results = [_result("test_foo.go", 0.9), _result("main.go", 0.8)]
    boosted = apply_boost(results, BoostConfig(enabled=False))
    assert boosted[0].chunk.file_path == "test_foo.go"
    assert boosted[0].score == 0.9


def test_apply_boost_penalties():
    results = [_result("foo_test.go", 0.9), _result("main.go", 0.8)]
    cfg = BoostConfig(enabled=True, penalties=[BoostRule(pattern="_test.go", factor=0.5)])
    boosted = apply_boost(results, cfg)
    assert boosted[0].chunk.file_path == "main.go"
    assert boosted[0].score == pytest.approx(0.8)
    assert boosted[1].score == pytest.approx(0.45)


def test_apply_boost_bonuses():
    results = [_result("utils/helper.go", 0.9), _result("cmd/main.go", 0.8)]
    cfg = BoostConfig(enabled=True, bonuses=[BoostRule(pattern="cmd/", factor=1.3)])
    boosted = apply_boost(results, cfg)
    assert boosted[0].chunk.file_path == "cmd/main.go"


def test_apply_boost_combined():
    results = [_result("cmd/main_test.go", 1.0), _result("internal/handler.go", 0.7)]
    cfg = BoostConfig(
        enabled=True,
        penalties=[BoostRule(pattern="_test.go", factor=0.5)],
        bonuses=[
            BoostRule(pattern="cmd/", factor=1.3),
            BoostRule(pattern="internal/", factor=1.1),
        ],
    )
    boosted = apply_boost(results, cfg)
    assert boosted[0].chunk.file_path == "internal/handler.go"


def test_apply_boost_empty_results():
    assert apply_boost([], BoostConfig(enabled=True)) == []


@pytest.mark.parametrize(
    "path, expected",
    [
        ("main.go", 1.0),
        ("foo_test.go", 0.5),
        ("project/src/main.go", 1.1),
        ("project/tests/foo_test.go", 0.25),
    ],
)
def test_compute_boost_factor(path, expected):
    cfg = BoostConfig(
        enabled=True,
        penalties=[
            BoostRule(pattern="_test.", factor=0.5),
            BoostRule(pattern="/tests/", factor=0.5),
        ],
        bonuses=[BoostRule(pattern="/src/", factor=1.1)],
    )
    assert compute_boost_factor(path, cfg) == pytest.approx(expected)


def test_matches_pattern_is_case_sensitive():
    assert matches_pattern("cmd/main.go", "cmd/") is True
    assert matches_pattern("CMD/main.go", "cmd/") is False