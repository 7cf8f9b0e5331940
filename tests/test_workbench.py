import asyncio

import pytest

from architect.graph import GenerationController
from architect.sinks import EXPORT_FILENAME, FileArtifactSink, MemorySink, build_export_text
from architect.workbench import (
    DEFAULT_TAB,
    PASSED_PREVIEW,
    Workbench,
    iteration_label,
    status_line,
)

from conftest import FakeService


def _bench(*outcomes):
    sink = MemorySink()
    return Workbench(GenerationController(FakeService(*outcomes)), sink), sink


def test_empty_bench_has_nothing_to_show():
    bench, sink = _bench()
    assert bench.current is None
    assert bench.presentation() is None
    assert bench.highlighted() is None
    assert bench.export() is False
    assert bench.copy() is False
    assert bench.toggle_audit() is False
    assert sink.exported == [] and sink.copied == []


def test_tab_resets_to_default_on_commit(login_result, retried_result, server_error):
    bench, _ = _bench(login_result, server_error, retried_result)
    asyncio.run(bench.controller.submit("one"))

    bench.select_tab("typescript")
    asyncio.run(bench.controller.submit("fails"))
    assert bench.active_tab == "typescript"

    asyncio.run(bench.controller.submit("two"))
    assert bench.active_tab == DEFAULT_TAB


def test_unknown_tab_rejected():
    bench, _ = _bench()
    with pytest.raises(ValueError):
        bench.select_tab("styles")
    assert bench.active_tab == DEFAULT_TAB


def test_highlighted_follows_tab(login_result):
    bench, _ = _bench(login_result)
    asyncio.run(bench.controller.submit("A login card"))

    assert "&lt;div" in bench.highlighted()
    bench.select_tab("typescript")
    assert 'color:#569cd6">class</span>' in bench.highlighted()
    with pytest.raises(ValueError):
        bench.highlighted("tokens")


def test_export_and_copy_go_through_sink(login_result):
    bench, sink = _bench(login_result)
    asyncio.run(bench.controller.submit("A login card"))

    assert bench.export() is True
    assert sink.exported == [build_export_text(login_result)]
    assert sink.exported[0] == "<!-- Template -->\n<div></div>\n\n/* TypeScript */\nclass X {}"

    assert bench.copy("typescript") is True
    assert bench.copy() is True
    assert sink.copied == ["class X {}", "<div></div>"]


def test_audit_toggle_per_turn(login_result, retried_result):
    bench, _ = _bench(login_result, retried_result)

    async def go():
        await bench.controller.submit("one")
        await bench.controller.submit("two")
    asyncio.run(go())

    assert bench.toggle_audit(1) is True
    assert bench.presentation(1).audit_expanded is True
    assert bench.presentation(3).audit_expanded is False

    assert bench.toggle_audit() is True
    assert bench.presentation().audit_expanded is True
    assert bench.toggle_audit(1) is False

    with pytest.raises(IndexError):
        bench.toggle_audit(0)
    with pytest.raises(IndexError):
        bench.toggle_audit(9)


def test_snapshot(retried_result, server_error):
    bench, _ = _bench(retried_result, server_error)
    asyncio.run(bench.controller.submit("A save form"))
    asyncio.run(bench.controller.submit("broken"))

    snap = bench.snapshot()

    assert snap["session_id"] == bench.controller.session_id
    assert snap["phase"] == "idle"
    assert "500" in snap["error"]
    assert [t["role"] for t in snap["turns"]] == ["user", "assistant"]
    assistant = snap["turns"][1]
    assert assistant["prompt"] == "A save form"
    assert assistant["iteration_label"] == "3 iterations"
    assert assistant["presentation"]["headline"] == "1 error(s) found"
    passed = [m for m in assistant["presentation"]["messages"] if m["category"] == "passed"]
    assert len(passed) == PASSED_PREVIEW
    assert snap["current"]["typescript"] == retried_result.component_source
    assert [t["id"] for t in snap["tabs"]] == ["template", "typescript", "tokens"]


def test_labels(login_result, retried_result):
    assert iteration_label(1) == "1 pass"
    assert iteration_label(4) == "4 iterations"
    assert status_line(login_result) == "Passed all validation checks"
    assert status_line(retried_result).startswith("Generated with warnings")


def test_file_sink_writes_export(tmp_path, capsys):
    sink = FileArtifactSink(tmp_path / "out")
    sink.export_artifact("hello")
    assert (tmp_path / "out" / EXPORT_FILENAME).read_text(encoding="utf-8") == "hello"

    sink.copy_to_clipboard("class X {}")
    assert "class X {}" in capsys.readouterr().out
