"""End-to-end tests through the assessment engine surface."""

from adaptquiz.engine.adaptive import Level
from adaptquiz.engine.diagnostics import Fundamental

from conftest import answer_correctly, answer_wrongly


def test_level_walks_up_and_back_down(engine):
    engine.start_session()
    assert engine.active_question().level is Level.EASY

    answer_correctly(engine)
    answer_correctly(engine)
    assert engine.state.level is Level.MEDIUM

    answer_wrongly(engine)
    answer_wrongly(engine)
    assert engine.state.level is Level.EASY

    answer_correctly(engine)
    assert not engine.should_end()
    answer_wrongly(engine)
    assert engine.state.answered == 6
    assert engine.should_end()


def test_questions_follow_cursor_across_levels(engine):
    engine.start_session()
    seen = []
    for submit in (answer_correctly, answer_correctly, answer_wrongly, answer_wrongly):
        seen.append(engine.active_question().id)
        submit(engine)
    # easy[0], easy[1], then medium pool at cursor 2 and 3
    assert seen == [1, 2, 4, 5]


def test_retention_missed_twice(engine, bank):
    engine.start_session()
    retention_q = bank.get(3)
    assert retention_q.fundamental is Fundamental.RETENTION

    engine.submit_answer(retention_q, "speed")
    answer_correctly(engine)
    engine.submit_answer(retention_q, "time/distance")

    counters = engine.diagnostics_snapshot()
    assert counters.retention == 2
    assert counters.listening == counters.grasping == counters.application == 0
    assert engine.recommendations()[0].fundamental is Fundamental.RETENTION


def test_normalized_answers_are_correct(engine, bank):
    assert engine.submit_answer(bank.get(1), " 60 ").correct
    assert engine.submit_answer(bank.get(3), "Distance/Time").correct


def test_recommendations_idempotent(engine):
    answer_wrongly(engine)
    assert engine.recommendations() == engine.recommendations()


def test_subscribers_see_each_mutation(engine):
    states = []
    unsubscribe = engine.subscribe(states.append)

    engine.start_session()
    answer_correctly(engine)
    engine.finish()
    assert [s.answered for s in states] == [0, 1, 1]
    assert states[-1].finished

    unsubscribe()
    engine.start_session()
    assert len(states) == 3


def test_response_log_joins_questions(engine):
    answer_correctly(engine)
    answer_wrongly(engine)
    log = engine.response_log()
    assert [e.question.id for e in log] == [1, 2]
    assert [e.event.correct for e in log] == [True, False]


def test_bank_views(engine):
    assert [q.id for q in engine.questions_by_level("hard")] == [6]
    assert len(engine.questions_by_chapter("All")) == 6
    assert engine.questions_by_chapter("Nowhere") == ()
    assert engine.chapters()[0] == "Time & Distance"


def test_practice_plan_reflects_mistakes(engine):
    assert engine.practice_plan() == []
    answer_wrongly(engine)
    assert len(engine.practice_plan()) == 1
