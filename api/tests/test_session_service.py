"""
Tests for study sessions: snapshot, swipes, undo and the end-of-session pass.
"""
from datetime import timedelta

import pytest

from swipenotes.core.exceptions import ConflictError, NotFoundError, ValidationError
from swipenotes.services.eligibility_service import get_daily_swipes_count, select_eligible_cards
from swipenotes.services.session_service import (
    end_session,
    get_active_session,
    get_sessions,
    record_swipe,
    start_session,
    undo_last_swipe
)

from conftest import NOW


class TestStartSession:
    def test_snapshot_of_eligible_cards(self, session, user, make_card):
        first = make_card(user, content="first")
        second = make_card(user, content="second")
        make_card(user, in_review_queue=True)

        study_session, limit_reached = start_session(session, user.id, now=NOW)

        assert limit_reached is False
        assert study_session.is_active is True
        assert study_session.started_at == NOW
        assert study_session.cards_swiped == 0
        assert study_session.swipe_history == []
        assert sorted(card["id"] for card in study_session.cards) == [first.id, second.id]
        assert {card["content"] for card in study_session.cards} == {"first", "second"}

    def test_limit_reached_gives_empty_session(self, session, make_user, make_card):
        user = make_user(daily_card_limit=1)
        make_card(user, last_seen_at=NOW - timedelta(hours=1))
        make_card(user)

        study_session, limit_reached = start_session(session, user.id, now=NOW)
        assert limit_reached is True
        assert study_session.cards == []

    def test_unknown_user(self, session):
        with pytest.raises(NotFoundError):
            start_session(session, 999, now=NOW)

    def test_active_and_listed_sessions(self, session, user):
        older, _ = start_session(session, user.id, now=NOW - timedelta(hours=1))
        newer, _ = start_session(session, user.id, now=NOW)
        end_session(session, newer.id, now=NOW)

        assert get_active_session(session, user.id).id == older.id
        assert [s.id for s in get_sessions(session, user.id)] == [newer.id, older.id]


class TestRecordSwipe:
    def test_swipe_updates_card_right_away(self, session, user, make_card):
        card = make_card(user)
        study_session, _ = start_session(session, user.id, now=NOW)

        study_session = record_swipe(session, study_session.id, card.id, "left", now=NOW)

        assert study_session.cards_swiped == 1
        assert study_session.swipe_history == [
            {"card_id": card.id, "direction": "left", "timestamp": NOW.isoformat(), "previous_last_seen_at": None}
        ]
        session.refresh(card)
        assert card.times_seen == 1
        assert card.times_left_swiped == 1
        assert card.times_right_swiped == 0
        assert card.last_seen_at == NOW
        # Interval and queue only change when the session ends
        assert card.interval_days == 1
        assert card.in_review_queue is False

    def test_swipes_count_towards_quota_immediately(self, session, make_user, make_card):
        user = make_user(daily_card_limit=1)
        card = make_card(user)
        make_card(user)
        study_session, _ = start_session(session, user.id, now=NOW)

        record_swipe(session, study_session.id, card.id, "right", now=NOW)

        assert select_eligible_cards(session, user.id, now=NOW).limit_reached is True

    def test_invalid_direction(self, session, user, make_card):
        card = make_card(user)
        study_session, _ = start_session(session, user.id, now=NOW)
        with pytest.raises(ValidationError):
            record_swipe(session, study_session.id, card.id, "up", now=NOW)

    def test_card_of_another_user(self, session, make_user, make_card):
        me, other = make_user(), make_user()
        foreign = make_card(other)
        study_session, _ = start_session(session, me.id, now=NOW)
        with pytest.raises(NotFoundError):
            record_swipe(session, study_session.id, foreign.id, "left", now=NOW)

    def test_unknown_session(self, session, user, make_card):
        card = make_card(user)
        with pytest.raises(NotFoundError):
            record_swipe(session, 999, card.id, "left", now=NOW)

    def test_swipe_after_end_is_rejected(self, session, user, make_card):
        card = make_card(user)
        study_session, _ = start_session(session, user.id, now=NOW)
        end_session(session, study_session.id, now=NOW)

        with pytest.raises(ConflictError):
            record_swipe(session, study_session.id, card.id, "left", now=NOW)
        session.refresh(card)
        assert card.times_seen == 0


class TestEndSession:
    def test_left_advances_interval_and_right_queues(self, session, user, make_card):
        learned = make_card(user, interval_days=30)
        keep = make_card(user, interval_days=7)
        study_session, _ = start_session(session, user.id, now=NOW)
        record_swipe(session, study_session.id, learned.id, "left", now=NOW)
        record_swipe(session, study_session.id, keep.id, "right", now=NOW + timedelta(seconds=5))

        ended = end_session(session, study_session.id, now=NOW + timedelta(minutes=1))

        assert ended.is_active is False
        assert ended.ended_at == NOW + timedelta(minutes=1)
        assert ended.cards_swiped == 2
        session.refresh(learned)
        session.refresh(keep)
        assert learned.interval_days == 60
        assert learned.in_review_queue is False
        assert learned.times_seen == 1
        assert keep.interval_days == 7
        assert keep.in_review_queue is True
        assert keep.times_right_swiped == 1
        assert keep.last_seen_at == NOW + timedelta(seconds=5)

    def test_ending_twice_applies_once(self, session, user, make_card):
        card = make_card(user)
        study_session, _ = start_session(session, user.id, now=NOW)
        record_swipe(session, study_session.id, card.id, "left", now=NOW)

        end_session(session, study_session.id, now=NOW)
        end_session(session, study_session.id, now=NOW + timedelta(hours=1))

        session.refresh(card)
        assert card.interval_days == 3
        assert card.times_seen == 1
        assert card.times_left_swiped == 1

    def test_empty_session(self, session, user, make_card):
        card = make_card(user)
        study_session, _ = start_session(session, user.id, now=NOW)

        ended = end_session(session, study_session.id, now=NOW)

        assert ended.is_active is False
        assert ended.cards_swiped == 0
        session.refresh(card)
        assert card.interval_days == 1
        assert card.times_seen == 0

    def test_card_outside_snapshot_is_counted_once(self, session, user, make_card):
        study_session, _ = start_session(session, user.id, now=NOW)
        late = make_card(user, content="added after the session started")

        record_swipe(session, study_session.id, late.id, "left", now=NOW)
        end_session(session, study_session.id, now=NOW)

        session.refresh(late)
        assert late.times_seen == 1
        assert late.times_left_swiped == 1
        assert late.interval_days == 3

    def test_last_direction_wins(self, session, user, make_card):
        card = make_card(user, interval_days=3)
        study_session, _ = start_session(session, user.id, now=NOW)
        record_swipe(session, study_session.id, card.id, "left", now=NOW)
        record_swipe(session, study_session.id, card.id, "right", now=NOW + timedelta(seconds=1))

        end_session(session, study_session.id, now=NOW)

        session.refresh(card)
        assert card.in_review_queue is True
        assert card.interval_days == 3
        assert card.times_seen == 2
        assert card.times_left_swiped == 1
        assert card.times_right_swiped == 1

    def test_deleted_card_is_skipped(self, session, user, make_card):
        card = make_card(user)
        study_session, _ = start_session(session, user.id, now=NOW)
        record_swipe(session, study_session.id, card.id, "left", now=NOW)
        session.delete(card)
        session.commit()

        ended = end_session(session, study_session.id, now=NOW)
        assert ended.is_active is False
        assert ended.cards_swiped == 1


class TestUndo:
    def test_undo_restores_card(self, session, user, make_card):
        seen_before = NOW - timedelta(days=1)
        card = make_card(user, last_seen_at=seen_before, times_seen=4, times_left_swiped=4)
        study_session, _ = start_session(session, user.id, now=NOW)
        record_swipe(session, study_session.id, card.id, "left", now=NOW)

        study_session = undo_last_swipe(session, study_session.id)

        assert study_session.swipe_history == []
        assert study_session.cards_swiped == 0
        session.refresh(card)
        assert card.times_seen == 4
        assert card.times_left_swiped == 4
        assert card.last_seen_at == seen_before

    def test_undo_only_removes_last_swipe(self, session, user, make_card):
        card = make_card(user)
        study_session, _ = start_session(session, user.id, now=NOW)
        record_swipe(session, study_session.id, card.id, "left", now=NOW)
        record_swipe(session, study_session.id, card.id, "right", now=NOW + timedelta(seconds=1))

        undo_last_swipe(session, study_session.id)
        end_session(session, study_session.id, now=NOW)

        session.refresh(card)
        assert card.times_seen == 1
        assert card.times_right_swiped == 0
        assert card.last_seen_at == NOW
        assert card.interval_days == 3
        assert card.in_review_queue is False

    def test_nothing_to_undo(self, session, user):
        study_session, _ = start_session(session, user.id, now=NOW)
        with pytest.raises(ValidationError):
            undo_last_swipe(session, study_session.id)

    def test_undo_after_end(self, session, user, make_card):
        card = make_card(user)
        study_session, _ = start_session(session, user.id, now=NOW)
        record_swipe(session, study_session.id, card.id, "left", now=NOW)
        end_session(session, study_session.id, now=NOW)
        with pytest.raises(ConflictError):
            undo_last_swipe(session, study_session.id)

    def test_undo_card_outside_snapshot_restores_last_seen(self, session, user, make_card):
        study_session, _ = start_session(session, user.id, now=NOW)
        late = make_card(user, content="added after the session started")
        record_swipe(session, study_session.id, late.id, "left", now=NOW)

        undo_last_swipe(session, study_session.id)

        session.refresh(late)
        assert late.times_seen == 0
        assert late.times_left_swiped == 0
        assert late.last_seen_at is None
        assert get_daily_swipes_count(session, user.id, NOW) == 0


class TestOverlappingSessions:
    def test_resumed_session_keeps_swipes_from_other_sessions(self, session, user, make_card):
        card = make_card(user)
        resumed, _ = start_session(session, user.id, now=NOW)
        later = NOW + timedelta(days=2)
        other, _ = start_session(session, user.id, now=later)
        record_swipe(session, other.id, card.id, "left", now=later)
        end_session(session, other.id, now=later)

        record_swipe(session, resumed.id, card.id, "left", now=later + timedelta(hours=1))

        session.refresh(card)
        assert card.times_seen == 2
        assert card.times_left_swiped == 2
        assert card.last_seen_at == later + timedelta(hours=1)

        end_session(session, resumed.id, now=later + timedelta(hours=2))
        session.refresh(card)
        assert card.times_seen == 2
        assert card.interval_days == 7

    def test_undo_keeps_newer_swipe_from_other_session(self, session, user, make_card):
        card = make_card(user)
        first, _ = start_session(session, user.id, now=NOW)
        record_swipe(session, first.id, card.id, "left", now=NOW)
        second, _ = start_session(session, user.id, now=NOW + timedelta(minutes=5))
        record_swipe(session, second.id, card.id, "right", now=NOW + timedelta(minutes=5))

        undo_last_swipe(session, first.id)

        session.refresh(card)
        assert card.times_seen == 1
        assert card.times_left_swiped == 0
        assert card.times_right_swiped == 1
        assert card.last_seen_at == NOW + timedelta(minutes=5)
