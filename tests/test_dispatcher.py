"""
Tests for key resolution and handler execution
"""

import asyncio

import pytest
from istari.arena import MenuArena
from istari.dispatcher import ActionDispatcher, AsyncRunner, ResolutionKind
from istari.exceptions import ActionTimeoutError, ConfigurationError, HandlerError
from istari.menu import new_menu
from istari.navigation import NavigationController


class State:
    def __init__(self):
        self.counter = 0


def increment(state, params):
    amount = int(params) if params else 1
    state.counter += amount
    return f"Counter incremented by {amount} to {state.counter}"


async def async_increment(state, params):
    await asyncio.sleep(0)
    state.counter += 10
    return f"Async counter at {state.counter}"


async def slow(state, params):
    await asyncio.sleep(5)
    return "too late"


def deferred(state, params):
    state.counter += 1

    async def finish():
        return f"Deferred at {state.counter}"

    return finish()


def failing(state, params):
    raise RuntimeError("boom")


@pytest.fixture
def dispatcher():
    root = new_menu("Main")
    root.add_action("inc", "Increment", increment)
    root.add_action("ainc", "Async increment", async_increment)
    root.add_async_action("def", "Deferred", deferred)
    root.add_action("silent", "Silent", lambda state, params: None)
    root.add_action("num", "Returns a number", lambda state, params: 42)
    root.add_action("fail", "Fails", failing)
    root.add_async_action("bad", "Not awaitable", lambda state, params: "plain")
    root.add_action("slow", "Slow", slow)
    root.add_submenu("s", "Settings", new_menu("Settings"))
    runner = AsyncRunner()
    yield ActionDispatcher(NavigationController(MenuArena(root)), runner)
    runner.close()


def test_resolve(dispatcher):
    assert dispatcher.resolve("inc").kind is ResolutionKind.ACTION
    assert dispatcher.resolve("S").kind is ResolutionKind.SUBMENU
    assert dispatcher.resolve("zzz").kind is ResolutionKind.NONE
    assert not dispatcher.resolve("zzz")


def test_resolve_has_no_side_effects(dispatcher):
    dispatcher.resolve("s")
    assert dispatcher.navigation.is_at_root()


def test_execute_sync(dispatcher):
    state = State()
    item = dispatcher.resolve("inc").item
    assert dispatcher.execute(item, state, "5") == "Counter incremented by 5 to 5"
    assert state.counter == 5


def test_execute_async(dispatcher):
    state = State()
    item = dispatcher.resolve("ainc").item
    assert dispatcher.execute(item, state, None) == "Async counter at 10"
    assert state.counter == 10


def test_execute_plain_function_returning_awaitable(dispatcher):
    state = State()
    item = dispatcher.resolve("def").item
    assert dispatcher.execute(item, state, None) == "Deferred at 1"


def test_silent_and_non_string_results(dispatcher):
    state = State()
    assert dispatcher.execute(dispatcher.resolve("silent").item, state) is None
    assert dispatcher.execute(dispatcher.resolve("num").item, state) == "42"


def test_handler_failure_is_wrapped(dispatcher):
    with pytest.raises(HandlerError) as exc_info:
        dispatcher.execute(dispatcher.resolve("fail").item, State())
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert exc_info.value.details["key"] == "fail"


def test_async_handler_must_return_awaitable(dispatcher):
    with pytest.raises(HandlerError):
        dispatcher.execute(dispatcher.resolve("bad").item, State())


def test_submenu_item_cannot_be_executed(dispatcher):
    with pytest.raises(ValueError):
        dispatcher.execute(dispatcher.resolve("s").item, State())


def test_runner_reuses_one_loop(dispatcher):
    loop = dispatcher.runner.loop
    state = State()
    item = dispatcher.resolve("ainc").item
    dispatcher.execute(item, state)
    dispatcher.execute(item, state)
    assert dispatcher.runner.loop is loop
    assert not dispatcher.runner.closed


def test_runner_timeout():
    runner = AsyncRunner(timeout=0.05)
    try:
        with pytest.raises(ActionTimeoutError) as exc_info:
            runner.run(slow(State(), None))
        assert exc_info.value.details["timeout_seconds"] == 0.05
    finally:
        runner.close()


def test_zero_timeout_means_wait_forever():
    runner = AsyncRunner(timeout=0)
    assert runner.timeout is None
    runner.close()


def test_close_is_idempotent():
    runner = AsyncRunner()
    runner.close()
    runner.close()
    assert runner.closed


def _interrupt():
    raise KeyboardInterrupt


def test_interrupted_action_is_cancelled():
    events = []

    async def interrupted():
        events.append("start")
        asyncio.get_running_loop().call_soon(_interrupt)
        await asyncio.sleep(0.05)
        events.append("end")

    async def follow_up():
        events.append("follow-up")
        await asyncio.sleep(0.1)
        return "done"

    runner = AsyncRunner()
    try:
        with pytest.raises(KeyboardInterrupt):
            runner.run(interrupted())
        assert runner.run(follow_up()) == "done"
        assert events == ["start", "follow-up"]
        assert not asyncio.all_tasks(runner.loop)
    finally:
        runner.close()


def test_negative_timeout_is_rejected():
    with pytest.raises(ConfigurationError) as exc_info:
        AsyncRunner(timeout=-1)
    assert exc_info.value.details["config_key"] == "session.async_timeout"
