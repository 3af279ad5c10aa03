import pytest

from tallytest.context import RunContext, get_context, use_context


def test_fixtures_are_read_only():
    context = RunContext(fixtures={"a": 1})

    with pytest.raises(TypeError):
        context.fixtures["a"] = 2


def test_fixtures_are_copied_from_the_source_mapping():
    source = {"a": 1}
    context = RunContext(fixtures=source)
    source["a"] = 2

    assert context.fixtures["a"] == 1


def test_use_context_restores_previous_context():
    outer = get_context()
    inner = RunContext()

    with use_context(inner) as active:
        assert active is inner
        assert get_context() is inner

    assert get_context() is outer


def test_use_context_restores_after_errors():
    outer = get_context()

    with pytest.raises(RuntimeError):
        with use_context(RunContext()):
            raise RuntimeError("boom")

    assert get_context() is outer
