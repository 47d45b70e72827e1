import asyncio
from dataclasses import replace

import pytest

from game import engine
from game.engine import InvalidTransition
from game.session import GamePhase
from game.session_manager import NoSuchGame, SessionManager
from game.timer import CountdownTimer

TICK = 0.005


async def wait_for(predicate, timeout=2.0):
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not reached in time")
        await asyncio.sleep(TICK)


def test_open_game_is_not_started():
    manager = SessionManager(tick_interval=TICK)
    session = manager.open_game('p1', 'c1', 3)
    assert session.phase is GamePhase.NOT_STARTED
    assert manager.get_session('p1', 'c1') is session
    assert manager.is_active('p1', 'c1')
    assert not manager.is_ticking('p1', 'c1')


def test_apply_without_game_raises():
    manager = SessionManager(tick_interval=TICK)
    with pytest.raises(KeyError):
        manager.apply('p1', 'c1', engine.start)


def test_invalid_transition_leaves_game_alone():
    manager = SessionManager(tick_interval=TICK)
    session = manager.open_game('p1', 'c1', 3)
    with pytest.raises(InvalidTransition):
        manager.apply('p1', 'c1', engine.use_hint)
    assert manager.get_session('p1', 'c1') is session


def test_countdown_runs_out():
    ticks = []

    async def scenario():
        manager = SessionManager(tick_interval=TICK)

        async def listener(session):
            ticks.append(session.seconds_remaining)

        manager.open_game('p1', 'c1', 3, listener=listener)
        manager.apply('p1', 'c1', engine.start)
        manager.apply('p1', 'c1', lambda s: replace(s, seconds_remaining=3))
        assert manager.is_ticking('p1', 'c1')

        await wait_for(lambda: manager.get_session('p1', 'c1').is_over)
        await asyncio.sleep(TICK * 5)
        return manager

    manager = asyncio.run(scenario())
    session = manager.get_session('p1', 'c1')
    assert session.phase is GamePhase.LOST
    assert session.outcome_message == "time exceeded"
    assert session.seconds_remaining == 0
    assert ticks == [2, 1, 0]
    assert not manager.is_ticking('p1', 'c1')


def test_feedback_pauses_the_clock():
    async def scenario():
        manager = SessionManager(tick_interval=TICK)
        manager.open_game('p1', 'c1', 3)
        manager.apply('p1', 'c1', engine.start)
        manager.apply('p1', 'c1', lambda s: replace(s, target=9))
        await wait_for(lambda: manager.get_session('p1', 'c1').seconds_remaining < 60)

        result = manager.apply('p1', 'c1', engine.submit_guess, "30")
        assert result.session.phase is GamePhase.AWAITING_FEEDBACK_ACK
        assert not manager.is_ticking('p1', 'c1')

        frozen = manager.get_session('p1', 'c1').seconds_remaining
        await asyncio.sleep(TICK * 10)
        assert manager.get_session('p1', 'c1').seconds_remaining == frozen

        manager.apply('p1', 'c1', engine.try_again)
        assert manager.is_ticking('p1', 'c1')
        await wait_for(lambda: manager.get_session('p1', 'c1').seconds_remaining < frozen)
        manager.shutdown()

    asyncio.run(scenario())


def test_rejected_guess_keeps_clock_running():
    async def scenario():
        manager = SessionManager(tick_interval=TICK)
        manager.open_game('p1', 'c1', 3)
        manager.apply('p1', 'c1', engine.start)
        result = manager.apply('p1', 'c1', engine.submit_guess, "banana")
        assert not result.accepted
        assert manager.is_ticking('p1', 'c1')
        manager.shutdown()

    asyncio.run(scenario())


def test_replacing_a_game_cancels_its_timer():
    async def scenario():
        manager = SessionManager(tick_interval=TICK)
        manager.open_game('p1', 'c1', 3)
        manager.apply('p1', 'c1', engine.start)
        old_timer = manager._games[('p1', 'c1')].timer
        assert old_timer.running

        fresh = manager.open_game('p1', 'c1', 4)
        assert not old_timer.running
        await asyncio.sleep(TICK * 10)
        assert manager.get_session('p1', 'c1') == fresh

    asyncio.run(scenario())


def test_new_game_after_loss():
    async def scenario():
        manager = SessionManager(tick_interval=TICK)
        manager.open_game('p1', 'c1', 5)
        manager.apply('p1', 'c1', engine.start)
        manager.apply('p1', 'c1', lambda s: replace(s, seconds_remaining=1))
        await wait_for(lambda: manager.get_session('p1', 'c1').is_over)

        session = manager.new_game('p1', 'c1')
        assert session.phase is GamePhase.IN_PROGRESS
        assert session.seed == 5
        assert session.seconds_remaining == 60
        assert manager.is_ticking('p1', 'c1')
        manager.shutdown()

    asyncio.run(scenario())


def test_win_stops_timer():
    async def scenario():
        manager = SessionManager(tick_interval=TICK)
        manager.open_game('p1', 'c1', 3)
        manager.apply('p1', 'c1', engine.start)
        target = manager.get_session('p1', 'c1').target
        manager.apply('p1', 'c1', engine.submit_guess, str(target))
        assert manager.get_session('p1', 'c1').phase is GamePhase.WON
        assert not manager.is_ticking('p1', 'c1')
        assert not manager.is_active('p1', 'c1')

    asyncio.run(scenario())


def test_close_game_cancels_timer():
    async def scenario():
        manager = SessionManager(tick_interval=TICK)
        manager.open_game('p1', 'c1', 3)
        manager.apply('p1', 'c1', engine.start)
        timer = manager._games[('p1', 'c1')].timer

        closed = manager.close_game('p1', 'c1')
        assert closed is not None
        assert not timer.running
        assert manager.get_session('p1', 'c1') is None
        assert manager.close_game('p1', 'c1') is None

    asyncio.run(scenario())


def test_games_are_per_player_and_channel():
    manager = SessionManager(tick_interval=TICK)
    manager.open_game('p1', 'c1', 3)
    manager.open_game('p2', 'c1', 4)
    manager.open_game('p1', 'c2', 5)
    assert len(manager.get_all_sessions()) == 3
    assert manager.get_session('p2', 'c1').seed == 4


def test_timer_stops_when_callback_says_so():
    calls = []

    async def scenario():
        async def on_tick():
            calls.append(1)
            return len(calls) < 3

        timer = CountdownTimer(on_tick, interval=TICK)
        timer.start()
        timer.start()  # already running
        await wait_for(lambda: not timer.running)

    asyncio.run(scenario())
    assert len(calls) == 3


def test_timer_cancel():
    calls = []

    async def scenario():
        async def on_tick():
            calls.append(1)
            return True

        timer = CountdownTimer(on_tick, interval=TICK)
        timer.start()
        await wait_for(lambda: len(calls) >= 2)
        timer.cancel()
        timer.cancel()
        seen = len(calls)
        await asyncio.sleep(TICK * 10)
        assert len(calls) == seen
        assert not timer.running

    asyncio.run(scenario())


def test_timer_stops_on_callback_error():
    async def scenario():
        async def on_tick():
            raise RuntimeError("boom")

        timer = CountdownTimer(on_tick, interval=TICK)
        timer.start()
        await wait_for(lambda: not timer.running)

    asyncio.run(scenario())


def test_replaced_owner_cannot_touch_new_game():
    released = []

    async def scenario():
        manager = SessionManager(tick_interval=TICK)
        old_board, new_board = object(), object()
        manager.open_game('p1', 'c1', 3, owner=old_board, on_release=lambda: released.append('old'))
        manager.open_game('p1', 'c1', 4, owner=new_board, on_release=lambda: released.append('new'))
        manager.apply('p1', 'c1', engine.start, owner=new_board)

        assert released == ['old']
        assert manager.close_game('p1', 'c1', owner=old_board) is None
        with pytest.raises(NoSuchGame):
            manager.apply('p1', 'c1', engine.use_hint, owner=old_board)
        with pytest.raises(NoSuchGame):
            manager.new_game('p1', 'c1', owner=old_board)
        assert manager.get_session('p1', 'c1', owner=old_board) is None

        session = manager.get_session('p1', 'c1', owner=new_board)
        assert session.seed == 4
        assert session.phase is GamePhase.IN_PROGRESS
        assert not session.hint_used
        assert manager.is_ticking('p1', 'c1')

        assert manager.close_game('p1', 'c1', owner=new_board) is not None
        assert released == ['old', 'new']

    asyncio.run(scenario())


def test_new_game_keeps_owner():
    async def scenario():
        manager = SessionManager(tick_interval=TICK)
        board = object()
        manager.open_game('p1', 'c1', 3, owner=board)
        manager.apply('p1', 'c1', engine.start, owner=board)
        manager.apply('p1', 'c1', lambda s: replace(s, seconds_remaining=1), owner=board)
        await wait_for(lambda: manager.get_session('p1', 'c1').is_over)

        session = manager.new_game('p1', 'c1', owner=board)
        assert manager.get_session('p1', 'c1', owner=board) is session
        manager.shutdown()

    asyncio.run(scenario())


def test_failing_listener_does_not_freeze_clock():
    async def scenario():
        manager = SessionManager(tick_interval=TICK)

        async def listener(session):
            raise RuntimeError("redraw failed")

        manager.open_game('p1', 'c1', 3, listener=listener)
        manager.apply('p1', 'c1', engine.start)
        manager.apply('p1', 'c1', lambda s: replace(s, seconds_remaining=3))
        await wait_for(lambda: manager.get_session('p1', 'c1').is_over)
        return manager.get_session('p1', 'c1')

    session = asyncio.run(scenario())
    assert session.outcome_message == "time exceeded"
    assert session.seconds_remaining == 0
