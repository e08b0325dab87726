import asyncio

import pytest

from conftest import FakeTextSource
from core.errors import (
    InvalidSourceError,
    OutputError,
    PathNotFoundError,
    RepoNotFoundError,
    TextSourceError,
    TokenizerError,
)
from core.models import OutputDestination
from output import writers
from session.controller import MERGE, RELOAD, QueueInputPoller, SessionController
from session.state import SessionState


class RecordingFactory:
    """Source factory returning a fresh FakeTextSource per call."""

    def __init__(self, files=None, *, errors=None, fail=None):
        self._files = files if files is not None else {"a.txt": "A", "b.md": "B"}
        self._errors = errors
        self._fail = fail
        self.targets = []
        self.sources = []

    def __call__(self, target):
        self.targets.append(target)
        if self._fail is not None:
            raise self._fail
        src = FakeTextSource(self._files, errors=self._errors)
        self.sources.append(src)
        return src


class SlowSource(FakeTextSource):
    def __init__(self, files, gate: asyncio.Event):
        super().__init__(files)
        self._gate = gate

    async def index(self, filter_config):
        await self._gate.wait()
        return await super().index(filter_config)


class RecordingDeliver:
    def __init__(self, fail=None):
        self.calls = []
        self._fail = fail

    def __call__(self, destination, text, output_path):
        self.calls.append((destination, text, output_path))
        if self._fail is not None:
            raise self._fail


def _controller(factory=None, deliver=None, token_counter=None, **state_kwargs):
    state = SessionState(**state_kwargs)
    return SessionController(
        state,
        source_factory=factory or RecordingFactory(),
        deliver=deliver or RecordingDeliver(),
        token_counter=token_counter,
        poll_interval=0.01,
    )


@pytest.mark.asyncio
async def test_tick_without_intents_does_nothing():
    factory = RecordingFactory()
    ctl = _controller(factory)

    assert await ctl.tick() is None
    assert factory.targets == []


@pytest.mark.asyncio
async def test_reload_indexes_and_selects_everything():
    factory = RecordingFactory()
    ctl = _controller(factory, source_path="/repo")

    ctl.request_reload()
    assert await ctl.tick() == RELOAD

    assert factory.targets == ["/repo"]
    assert ctl.state.paths() == ["a.txt", "b.md"]
    assert ctl.state.selected_files == {"a.txt", "b.md"}
    assert not ctl.reload_requested
    assert not ctl.busy


@pytest.mark.asyncio
async def test_repeated_requests_collapse_into_one_reload():
    factory = RecordingFactory()
    ctl = _controller(factory)

    ctl.request_reload()
    ctl.request_reload()
    ctl.request_reload()
    await ctl.tick()
    await ctl.tick()

    assert len(factory.targets) == 1


@pytest.mark.asyncio
async def test_reload_always_recreates_source():
    factory = RecordingFactory()
    ctl = _controller(factory)

    ctl.request_reload()
    await ctl.tick()
    first = ctl.state.source
    ctl.request_reload()
    await ctl.tick()

    assert len(factory.sources) == 2
    assert ctl.state.source is not first


@pytest.mark.asyncio
async def test_reload_resets_selection():
    ctl = _controller()
    ctl.request_reload()
    await ctl.tick()
    ctl.state.toggle_file("a.txt")

    ctl.request_reload()
    await ctl.tick()

    assert ctl.state.selected_files == {"a.txt", "b.md"}


@pytest.mark.asyncio
async def test_reload_has_priority_over_merge():
    ctl = _controller()
    ctl.request_merge()
    ctl.request_reload()

    assert await ctl.tick() == RELOAD
    assert ctl.merge_requested
    assert await ctl.tick() == MERGE
    assert await ctl.tick() is None


@pytest.mark.asyncio
async def test_reload_failure_clears_index():
    factory = RecordingFactory()
    ctl = _controller(factory)
    ctl.request_reload()
    await ctl.tick()

    err = RepoNotFoundError("o/r")
    ctl.state.source_path = "https://github.com/o/r"
    ctl._source_factory = RecordingFactory(fail=err)
    ctl.request_reload()
    await ctl.tick()

    assert ctl.state.source is None
    assert ctl.state.files == []
    assert ctl.state.last_error is err
    assert not ctl.busy


@pytest.mark.asyncio
async def test_set_source_path_queues_reload_only_on_change():
    ctl = _controller(source_path=".")

    ctl.set_source_path(".")
    assert not ctl.reload_requested

    ctl.set_source_path("/other")
    assert ctl.reload_requested
    assert ctl.state.source_path == "/other"


@pytest.mark.asyncio
async def test_concurrent_ticks_run_one_operation():
    gate = asyncio.Event()
    targets = []

    def factory(target):
        targets.append(target)
        return SlowSource({"a.txt": "A"}, gate)

    ctl = _controller(factory)
    ctl.request_reload()

    first = asyncio.create_task(ctl.tick())
    await asyncio.sleep(0)
    assert ctl.busy

    # Requests made while busy stay queued; a second tick is a no-op
    ctl.request_reload()
    assert await ctl.tick() is None

    gate.set()
    assert await first == RELOAD
    assert targets == ["."]
    assert ctl.reload_requested

    assert await ctl.tick() == RELOAD
    assert len(targets) == 2


@pytest.mark.asyncio
async def test_reload_target_is_read_when_reload_starts():
    factory = RecordingFactory()
    ctl = _controller(factory, source_path="/first")

    ctl.request_reload()
    ctl.state.source_path = "/second"
    await ctl.tick()

    assert factory.targets == ["/second"]


@pytest.mark.asyncio
async def test_merge_delivers_and_counts_tokens():
    deliver = RecordingDeliver()
    counted = []

    def counter(text):
        counted.append(text)
        return 42

    ctl = _controller(
        deliver=deliver,
        token_counter=counter,
        output_path="out.txt",
        destination=OutputDestination.FILE,
    )
    ctl.request_reload()
    await ctl.tick()
    ctl.state.toggle_file("b.md")

    ctl.request_merge()
    assert await ctl.tick() == MERGE

    expected = "--- START FILE: a.txt ---\nA\n--- END FILE: a.txt ---\n\n"
    assert deliver.calls == [(OutputDestination.FILE, expected, "out.txt")]
    assert ctl.state.last_output == expected
    assert ctl.state.last_token_count == 42
    assert counted == [expected]
    assert ctl.state.last_error is None


@pytest.mark.asyncio
async def test_merge_without_source_records_error():
    deliver = RecordingDeliver()
    ctl = _controller(deliver=deliver)

    ctl.request_merge()
    await ctl.tick()

    assert isinstance(ctl.state.last_error, InvalidSourceError)
    assert deliver.calls == []


@pytest.mark.asyncio
async def test_merge_fetch_error_is_recorded():
    err = PathNotFoundError("b.md")
    deliver = RecordingDeliver()
    ctl = _controller(RecordingFactory(errors={"b.md": err}), deliver=deliver)
    ctl.request_reload()
    await ctl.tick()

    ctl.request_merge()
    await ctl.tick()

    assert ctl.state.last_error is err
    assert ctl.state.last_output is None
    assert deliver.calls == []


@pytest.mark.asyncio
async def test_merge_output_error_is_recorded():
    err = OutputError("Clipboard is not available")
    ctl = _controller(deliver=RecordingDeliver(fail=err))
    ctl.request_reload()
    await ctl.tick()

    ctl.request_merge()
    await ctl.tick()

    assert ctl.state.last_error is err
    assert ctl.state.last_output is None
    assert not ctl.busy


@pytest.mark.asyncio
async def test_merge_tokenizer_failure_leaves_count_empty():
    def counter(text):
        raise TokenizerError("no encoding")

    ctl = _controller(token_counter=counter)
    ctl.request_reload()
    await ctl.tick()
    ctl.request_merge()
    await ctl.tick()

    assert ctl.state.last_output
    assert ctl.state.last_token_count is None
    assert ctl.state.last_error is None


@pytest.mark.asyncio
async def test_run_loop_dispatches_events_until_exit():
    factory = RecordingFactory()
    deliver = RecordingDeliver()
    ctl = _controller(factory, deliver=deliver)

    def handler(event, controller):
        if event == "reload":
            controller.request_reload()
        elif event == "merge":
            controller.request_merge()
        elif event == "quit":
            controller.request_exit()

    poller = QueueInputPoller(handler)
    poller.put("reload")
    poller.put("merge")

    async def _stop_later():
        while not deliver.calls:
            await asyncio.sleep(0.01)
        poller.put("quit")

    stopper = asyncio.create_task(_stop_later())
    await asyncio.wait_for(ctl.run(poller), timeout=5)
    await stopper

    assert ctl.exit_requested
    assert len(factory.targets) == 1
    assert len(deliver.calls) == 1


@pytest.mark.asyncio
async def test_queue_poller_times_out_with_none():
    poller = QueueInputPoller(lambda event, controller: None)
    assert await poller.poll(0.01) is None


@pytest.mark.asyncio
async def test_reload_of_unusable_local_path_is_recorded(tmp_path):
    ctl = SessionController(SessionState(source_path=str(tmp_path / ("x" * 5000))))

    ctl.request_reload()
    assert await ctl.tick() == RELOAD

    assert isinstance(ctl.state.last_error, TextSourceError)
    assert ctl.state.source is None
    assert not ctl.busy


@pytest.mark.asyncio
async def test_merge_of_undecodable_file_name_is_recorded(tmp_path):
    # os.scandir surrogate-escapes names that are not valid UTF-8
    target = tmp_path / "merged.txt"
    ctl = _controller(
        RecordingFactory({"\udcff.txt": "A"}),
        deliver=writers.deliver,
        output_path=str(target),
        destination=OutputDestination.FILE,
    )
    ctl.request_reload()
    await ctl.tick()

    ctl.request_merge()
    assert await ctl.tick() == MERGE

    assert isinstance(ctl.state.last_error, OutputError)
    assert ctl.state.last_output is None
    assert not target.exists()
