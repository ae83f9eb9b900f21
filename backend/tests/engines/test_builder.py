"""Unit tests for engines.builder."""

from livedemo.engines.builder import build
from livedemo.engines.models import NO_FALLBACK, Constructors, Fallback
from livedemo.engines.runtime import JSError


class Entry:
    pass


class Data:
    def __init__(self) -> None:
        self.name = "d"


class Exploding:
    def __init__(self) -> None:
        raise JSError("constructor failed")


FALLBACK = Fallback(instance="old", initial_data={"old": True})


class TestBuild:
    def test_instantiates_primary_and_companion(self) -> None:
        result = build(Constructors(primary=Entry, companion=Data), NO_FALLBACK)
        assert result.ok
        assert isinstance(result.instance, Entry)
        assert result.initial_data.name == "d"

    def test_no_companion(self) -> None:
        result = build(Constructors(primary=Entry), NO_FALLBACK)
        assert result.initial_data is None

    def test_missing_primary_uses_fallback(self) -> None:
        result = build(Constructors(), FALLBACK)
        assert result.error == "No entry class found"
        assert result.instance == "old"
        assert result.initial_data == {"old": True}

    def test_throwing_constructor_uses_fallback(self) -> None:
        result = build(Constructors(primary=Exploding), FALLBACK)
        assert result.error == "constructor failed"
        assert result.instance == "old"

    def test_throwing_companion_uses_fallback(self) -> None:
        result = build(Constructors(primary=Entry, companion=Exploding), FALLBACK)
        assert not result.ok
        assert result.fallback == FALLBACK

    def test_not_a_constructor(self) -> None:
        result = build(Constructors(primary=42), NO_FALLBACK)
        assert result.error == "42 is not a constructor"
        assert result.instance is None
