"""Tests for failure recording and entity removal."""

from casper.core.models import CategoryInfo, CategoryRef, ErrorKind, Manifest, ResolutionIssue
from casper.markdown import link_entities
from casper.resolution import ErrorCollector, ResolutionContext, RunState


def _state(*ids: str) -> RunState:
    store = {i: {"id": i, "name": i.upper()} for i in ids}
    return RunState(
        records=store,
        manifest=Manifest(list(store)),
        components=[],
        render=lambda text: text,
    )


def _issue(message: str = "broken") -> ResolutionIssue:
    return ResolutionIssue(kind=ErrorKind.INVALID_DATA, component="x", message=message)


def test_fail_removes_entity_everywhere():
    state = _state("a", "b")
    state.passed.add("name", "a")
    state.passed.add("name", "b")
    collector = ErrorCollector()

    removed = collector.fail("a", _issue(), state)

    assert removed == ["a"]
    assert "a" not in state.manifest
    assert "a" not in state.records
    assert state.passed.ids("name") == ["b"]
    assert collector.report.get("a")[0].message == "broken"


def test_backlinks_withdrawn():
    state = _state("cat", "a", "b")
    state.manifest["cat"].set("category", CategoryInfo())
    ResolutionContext("a", state).backlink("cat", "category", "entities")
    ResolutionContext("b", state).backlink("cat", "category", "entities")

    ErrorCollector().fail("a", _issue(), state)

    assert state.manifest["cat"]["category"].entities == ["b"]


def test_dependents_fail_with_target():
    state = _state("target", "user", "user_of_user", "bystander")
    state.ledger.depend("user", "target", "properties")
    state.ledger.depend("user_of_user", "user", "req")
    collector = ErrorCollector()

    removed = collector.fail("target", _issue(), state)

    assert removed == ["target", "user", "user_of_user"]
    assert state.manifest.ids() == ["bystander"]
    issue = collector.report.get("user")[0]
    assert issue.kind == ErrorKind.UNDEFINED_REFERENCE
    assert issue.message == "user references target, which failed to resolve"
    assert issue.component == "properties"
    assert collector.report.get("user_of_user")[0].component == "req"


def test_failing_dead_entity_is_noop():
    state = _state("a")
    collector = ErrorCollector()
    collector.fail("a", _issue(), state)

    assert collector.fail("a", _issue("again"), state) == []
    assert len(collector.report.get("a")) == 1


def test_add_logs_warning(caplog):
    collector = ErrorCollector()
    with caplog.at_level("WARNING", logger="casper"):
        collector.add("a", _issue("oops"))
    assert "oops" in caplog.text


def test_soft_link_withdraws_item_without_failing_holder():
    state = _state("cat", "member")
    ref = CategoryRef(id="cat", name="CAT")
    state.manifest["member"].set("categories", [ref])
    ResolutionContext("member", state).soft_link("cat", "categories", ref)

    removed = ErrorCollector().fail("cat", _issue(), state)

    assert removed == ["cat"]
    assert state.manifest["member"]["categories"] == []


def test_mentions_rerendered_after_target_fails():
    state = _state("a", "b")
    state.render = lambda text: link_entities(text, state.records)
    text = ResolutionContext("a", state).render_text("See @b.")
    assert ">B</a>" in text.rendered

    removed = ErrorCollector().fail("b", _issue(), state)

    assert removed == ["b"]
    assert "a" in state.manifest
    assert text.raw == "See @b."
    assert "[Reference Error: b]" in text.rendered
