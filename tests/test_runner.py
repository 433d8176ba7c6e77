import io
import logging
import re
from datetime import datetime

import httpx
import pytest

from aoc_runner.errors import MultipleIncorrect, NoDaySpecified, PartNotFound
from aoc_runner.modes import Mode
from aoc_runner.release import PUZZLE_TZ
from aoc_runner.runner import Runner, Settings


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def make_runner(config, echo_registry, out):
    def _make(days, **kw):
        transport = kw.pop("transport", None)
        now = kw.pop("now", None)
        return Runner(
            Settings(days=list(days), **kw),
            config,
            registry=echo_registry,
            out=out,
            transport=transport,
            now=now,
            sleep=lambda s: None,
        )

    return _make


@pytest.fixture
def propagate(monkeypatch):
    # configure_logging() turns propagation off; caplog listens on the root logger.
    monkeypatch.setattr(logging.getLogger("aoc_runner"), "propagate", True)


def _lines(out):
    return out.getvalue().splitlines()


def test_run_prints_parts_and_totals(make_runner, write_input, out):
    write_input(1, "hello\n")
    solver_time = make_runner(["1"]).run()

    lines = _lines(out)
    assert re.match(r"^d01p00: \(\S+\)$", lines[0])
    assert re.match(r"^d01p01: \(\S+\) 6$", lines[1])
    assert re.match(r"^d01p02: \(\S+\) HELLO$", lines[2])
    assert lines[3].startswith("d01 total: ")
    assert lines[4] == ""
    assert lines[5].startswith("All: ")
    assert solver_time >= 0


def test_run_selected_parts_in_order(make_runner, write_input, out):
    write_input(2, "ab")
    make_runner(["2.2.3.1"]).run()
    parts = [line.split(":")[0] for line in _lines(out)[:4]]
    assert parts == ["d02p00", "d02p02", "d02p03", "d02p01"]
    assert _lines(out)[2].endswith(" three")


def test_hide_answers(make_runner, write_input, out):
    write_input(1, "hello\n")
    make_runner(["1"], hide_answers=True).run()
    assert re.match(r"^d01p01: \(\S+\)$", _lines(out)[1])
    assert "HELLO" not in out.getvalue()


def test_answer_whitespace_is_printed_as_is(make_runner, write_input, out):
    class Padded:
        def __init__(self, data, debug):
            pass

        def part_one(self, debug):
            return "x  "

        def part_two(self, debug):
            return ""

        def run_any(self, part, debug):
            return "\ty"

    runner = make_runner(["3.1.2.3"])
    runner.registry.register(3, Padded)
    write_input(3, "ignored")
    runner.run()

    lines = _lines(out)
    assert re.match(r"^d03p01: \(\S+\) x  $", lines[1])
    assert re.match(r"^d03p02: \(\S+\)$", lines[2])
    assert re.match(r"^d03p03: \(\S+\) \ty$", lines[3])


def test_test_variant_input(make_runner, write_input, out):
    write_input(1, "real\n")
    write_input(1, "xy\n", variant=1)
    make_runner(["1.2"], test=1).run()
    assert _lines(out)[1].endswith(" XY")


def test_unknown_days_are_skipped(make_runner, write_input, out, caplog, propagate):
    write_input(1, "hello\n")
    with caplog.at_level(logging.WARNING, logger="aoc_runner"):
        make_runner(["26", "3", "1"]).run()

    assert "Day 26 not found, skipping" in caplog.text
    assert "Day 3 not found, skipping" in caplog.text
    assert [line for line in _lines(out) if line.startswith("d")][0].startswith("d01p00")


def test_all_days_runs_registered_ones(make_runner, write_input, out):
    write_input(1, "a")
    write_input(2, "b")
    make_runner(["0"]).run()
    text = out.getvalue()
    assert "d01 total" in text and "d02 total" in text
    assert "d03" not in text


def test_missing_day_argument(make_runner):
    with pytest.raises(NoDaySpecified):
        make_runner([""]).run()


def test_unknown_part_propagates(make_runner, write_input):
    write_input(1, "hello\n")
    with pytest.raises(PartNotFound) as exc:
        make_runner(["1.4"]).run()
    assert exc.value.part == 4


def test_bench_count_output(make_runner, write_input, out):
    write_input(1, "hello\n")
    make_runner(["1"], mode=Mode.BENCH, bench_count=3).run()

    lines = _lines(out)
    assert re.match(r"^d01: ran +3 times over +\S+ for avg of +\S+, median +\S+, min +\S+ \[\"6\", \"HELLO\"\]$", lines[0])
    assert lines[-1].startswith("All: run avg of ")


def test_bench_hides_answers(make_runner, write_input, out):
    write_input(1, "hello\n")
    make_runner(["1"], mode=Mode.BENCH, bench_count=2, hide_answers=True).run()
    assert "HELLO" not in out.getvalue()


def test_bench_warns_on_answer_drift(make_runner, write_input, store, caplog, propagate):
    write_input(1, "hello\n")
    store.answer_path(1).write_text("6\nGOODBYE\n")
    with caplog.at_level(logging.WARNING, logger="aoc_runner"):
        make_runner(["1"], mode=Mode.BENCH, bench_count=1).run()
    assert 'd01p02: benchmarked answer "HELLO" does not match saved answer "GOODBYE"' in caplog.text
    assert "d01p01" not in caplog.text


def test_save_then_validate(make_runner, write_input, store, out):
    write_input(1, "hello\n")
    make_runner(["1"], mode=Mode.SAVE).run()
    assert store.answer_path(1).read_text() == "6\nHELLO\n"

    make_runner(["1"], mode=Mode.VALIDATE).run()
    assert _lines(out)[-1] == "All answers were correct!"


def test_validate_reports_incorrect(make_runner, write_input, store):
    write_input(1, "hello\n")
    store.answer_path(1).write_text("5\nHELLO\n")
    with pytest.raises(MultipleIncorrect) as exc:
        make_runner(["1"], mode=Mode.VALIDATE).run()
    assert exc.value.count == 1
    assert store.answer_path(1).read_text() == "5\nHELLO\n"


def test_fetches_missing_input(make_runner, config, store, out):
    config.api_key_file.write_text("abc")
    seen = []

    def site(request):
        seen.append(request.url.path)
        if request.url.path.endswith("/input"):
            return httpx.Response(200, content=b"network\n")
        return httpx.Response(200, content=b"<pre><code>ex\n</code></pre>")

    make_runner(
        ["2"],
        transport=httpx.MockTransport(site),
        now=lambda: datetime(2024, 1, 1, tzinfo=PUZZLE_TZ),
    ).run()

    assert seen == ["/2023/day/2/input", "/2023/day/2"]
    assert store.input_path(2).read_bytes() == b"network\n"
    assert store.input_path(2, 1).read_bytes() == b"ex\n"
    assert _lines(out)[2].endswith(" NETWORK")


def test_metrics_file_is_written(make_runner, write_input, tmp_path):
    write_input(1, "hello\n")
    target = tmp_path / "runner.prom"
    make_runner(["1"], metrics_file=target).run()

    text = target.read_text()
    assert 'aoc_part_seconds_count{day="1",part="1"} 1.0' in text
    assert 'aoc_part_seconds_count{day="1",part="2"} 1.0' in text


def test_metrics_file_written_on_failure(make_runner, write_input, tmp_path):
    write_input(1, "hello\n")
    target = tmp_path / "runner.prom"
    with pytest.raises(PartNotFound):
        make_runner(["1.9"], metrics_file=target).run()
    assert target.exists()
