"""Unit tests for engines.combiner."""

from livedemo.engines.combiner import combine, entry_name
from livedemo.engines.models import SourceUnit


def _units() -> list[SourceUnit]:
    return [
        SourceUnit("Page.ts", "PAGE", is_entry=True),
        SourceUnit("a.ts", "A"),
        SourceUnit("styles.css", "CSS"),
        SourceUnit("b.tsx", "B"),
    ]


class TestEntryName:
    def test_flagged_unit(self) -> None:
        assert entry_name(_units()) == "Page.ts"

    def test_defaults_to_first(self) -> None:
        units = [SourceUnit("x.ts", "X"), SourceUnit("y.ts", "Y")]
        assert entry_name(units) == "x.ts"

    def test_no_units(self) -> None:
        assert entry_name([]) is None


class TestCombine:
    def test_entry_last_helpers_in_order(self) -> None:
        out = combine(_units(), "Page.ts")
        assert out.index("A") < out.index("B") < out.index("PAGE")
        assert out.endswith("PAGE")

    def test_non_source_files_skipped(self) -> None:
        assert "CSS" not in combine(_units(), "Page.ts")

    def test_extensionless_unit_is_source(self) -> None:
        units = [SourceUnit("helpers", "H"), SourceUnit("main.ts", "M", is_entry=True)]
        assert combine(units, "main.ts") == "H\n\nM"

    def test_unknown_entry_contributes_nothing(self) -> None:
        units = [SourceUnit("a.ts", "A")]
        assert combine(units, "missing.ts") == "A\n\n"

    def test_single_unit(self) -> None:
        assert combine([SourceUnit("only.ts", "ONLY")], "only.ts") == "ONLY"

    def test_source_unit_is_source(self) -> None:
        assert SourceUnit("a.js", "").is_source
        assert SourceUnit("dir/a.jsx", "").is_source
        assert not SourceUnit("data.json", "").is_source
