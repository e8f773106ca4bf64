"""
SessionClock tests: countdown driving, auto-submit and teardown.
"""

import asyncio

import pytest

from mathmaster.quiz import QuizSession, SessionClock, SessionState, SubmitTrigger
from mathmaster.schemas import Part, QuizMode


@pytest.mark.asyncio
async def test_clock_auto_submits(question_set):
    session = QuizSession(question_set, QuizMode.ASSESSMENT, duration_seconds=3)
    session.record_answer(Part.C, "1", "10")
    clock = SessionClock(session, interval=0)
    clock.start()
    await asyncio.wait_for(clock.wait(), timeout=5)

    assert session.state == SessionState.SUBMITTED
    assert session.result.trigger == SubmitTrigger.TIMEOUT
    assert session.result.score == 0.5
    assert clock.running is False


@pytest.mark.asyncio
async def test_clock_stops_after_manual_submit(question_set):
    submitted = []
    session = QuizSession(
        question_set, QuizMode.ASSESSMENT, duration_seconds=1000, on_submitted=submitted.append
    )
    clock = SessionClock(session, interval=0)
    clock.start()
    await asyncio.sleep(0)
    session.request_submit()
    session.confirm_submit()
    await asyncio.wait_for(clock.wait(), timeout=5)

    assert len(submitted) == 1
    assert submitted[0].trigger == SubmitTrigger.MANUAL
    assert session.remaining_seconds > 0


@pytest.mark.asyncio
async def test_clock_stops_when_session_closed(question_set):
    session = QuizSession(question_set, QuizMode.ASSESSMENT, duration_seconds=1000)
    clock = SessionClock(session, interval=0)
    clock.start()
    await asyncio.sleep(0)
    session.close()
    await asyncio.wait_for(clock.wait(), timeout=5)

    remaining = session.remaining_seconds
    await asyncio.sleep(0)
    assert session.remaining_seconds == remaining
    assert session.state == SessionState.ANSWERING


@pytest.mark.asyncio
async def test_stop_cancels_countdown(question_set):
    session = QuizSession(question_set, QuizMode.ASSESSMENT, duration_seconds=1000)
    clock = SessionClock(session, interval=10)
    clock.start()
    clock.stop()
    await clock.wait()

    assert clock.running is False
    assert session.remaining_seconds == 1000


@pytest.mark.asyncio
async def test_practice_session_clock_exits_immediately(question_set):
    session = QuizSession(question_set, QuizMode.PRACTICE)
    clock = SessionClock(session, interval=0)
    clock.start()
    await asyncio.wait_for(clock.wait(), timeout=5)
    assert session.state == SessionState.ANSWERING


@pytest.mark.asyncio
async def test_start_twice_reuses_task(question_set):
    session = QuizSession(question_set, QuizMode.ASSESSMENT, duration_seconds=1000)
    clock = SessionClock(session, interval=10)
    assert clock.start() is clock.start()
    clock.stop()
    await clock.wait()


@pytest.mark.asyncio
async def test_wait_without_start(question_set):
    clock = SessionClock(QuizSession(question_set, QuizMode.ASSESSMENT))
    await clock.wait()
