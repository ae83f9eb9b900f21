"""Unit tests for the demo catalogue and registry."""

import pytest

from livedemo.demos import CATALOG, DemoRegistry, DemoState, create_demo


@pytest.mark.parametrize("definition", CATALOG, ids=lambda d: d.id)
def test_builtin_demos_compile(definition) -> None:
    demo = create_demo(definition)
    assert demo.state is DemoState.INITIAL
    assert demo.instance is not None
    view = demo.view()
    assert view is not None
    assert view["root"]["kind"] == definition.variant.name


def test_builtin_demos_run_cleanly() -> None:
    for definition in CATALOG:
        demo = create_demo(definition)
        result = demo.run()
        assert result.error is None, definition.id
        assert demo.state is DemoState.COMPILED


def test_catalogue_has_one_entry_per_demo() -> None:
    for definition in CATALOG:
        entries = [f.name for f in definition.files if f.is_entry]
        assert len(entries) == 1, definition.id


def test_definition_sources_are_fresh_copies() -> None:
    definition = CATALOG[0]
    first = definition.sources()
    first[0].content = "changed"
    assert definition.sources()[0].content != "changed"


class TestRegistry:
    def test_ids(self) -> None:
        assert DemoRegistry().ids() == [d.id for d in CATALOG]

    def test_get_is_cached(self) -> None:
        demos = DemoRegistry()
        assert demos.get("contact-form") is demos.get("contact-form")

    def test_unknown(self) -> None:
        with pytest.raises(KeyError):
            DemoRegistry().get("nope")

    def test_reset_one(self) -> None:
        demos = DemoRegistry()
        demo = demos.get("contact-form")
        demo.edit(demo.entry, "garbage")
        other = demos.get("employee-entity")
        demos.reset("contact-form")
        fresh = demos.get("contact-form")
        assert fresh is not demo
        assert fresh.dirty is False
        assert demos.get("employee-entity") is other

    def test_reset_all(self) -> None:
        demos = DemoRegistry()
        demo = demos.get("contact-form")
        demos.reset()
        assert demos.get("contact-form") is not demo

    def test_custom_definitions(self) -> None:
        demos = DemoRegistry({CATALOG[0].id: CATALOG[0]})
        assert [d.id for d in demos.all()] == [CATALOG[0].id]
