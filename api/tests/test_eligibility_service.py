"""
Tests for card eligibility and the daily quota.
"""
import random
from datetime import timedelta

import pytest

from swipenotes.core.exceptions import NotFoundError
from swipenotes.services.eligibility_service import (
    get_daily_swipes_count,
    get_due_cards,
    select_eligible_cards
)

from conftest import NOW


class TestDailySwipesCount:
    def test_counts_cards_seen_today_only(self, session, user, make_card):
        make_card(user, last_seen_at=NOW - timedelta(hours=1))
        make_card(user, last_seen_at=NOW.replace(hour=0, minute=0))
        make_card(user, last_seen_at=NOW.replace(hour=0, minute=0) - timedelta(minutes=1))
        make_card(user)
        assert get_daily_swipes_count(session, user.id, NOW) == 2

    def test_other_users_are_not_counted(self, session, make_user, make_card):
        me, other = make_user(), make_user()
        make_card(other, last_seen_at=NOW - timedelta(hours=1))
        assert get_daily_swipes_count(session, me.id, NOW) == 0


class TestDueCards:
    def test_due_rules(self, session, user, make_card):
        never_seen = make_card(user)
        due_exactly = make_card(user, last_seen_at=NOW - timedelta(days=3), interval_days=3)
        make_card(user, last_seen_at=NOW - timedelta(days=3), interval_days=7)
        make_card(user, in_review_queue=True)

        due = get_due_cards(session, user.id, NOW)
        assert [card.id for card in due] == [never_seen.id, due_exactly.id]


class TestSelectEligibleCards:
    def test_unknown_user(self, session):
        with pytest.raises(NotFoundError):
            select_eligible_cards(session, 999, now=NOW)

    def test_remaining_quota_caps_selection(self, session, make_user, make_card):
        user = make_user(daily_card_limit=5)
        for _ in range(3):
            make_card(user, last_seen_at=NOW - timedelta(hours=2))
        for _ in range(10):
            make_card(user)

        result = select_eligible_cards(session, user.id, now=NOW)
        assert len(result.cards) == 2
        assert result.limit_reached is False

    def test_limit_reached(self, session, make_user, make_card):
        user = make_user(daily_card_limit=2)
        make_card(user, last_seen_at=NOW - timedelta(hours=2))
        make_card(user, last_seen_at=NOW - timedelta(hours=1))
        make_card(user)

        result = select_eligible_cards(session, user.id, now=NOW)
        assert result.cards == []
        assert result.limit_reached is True

    def test_review_queue_is_never_selected(self, session, user, make_card):
        make_card(user, in_review_queue=True)
        kept = make_card(user)

        result = select_eligible_cards(session, user.id, now=NOW)
        assert [card.id for card in result.cards] == [kept.id]

    def test_order_is_shuffled_with_given_rng(self, session, user, make_card):
        ids = [make_card(user).id for _ in range(8)]

        first = select_eligible_cards(session, user.id, now=NOW, rng=random.Random(1))
        again = select_eligible_cards(session, user.id, now=NOW, rng=random.Random(1))

        assert sorted(card.id for card in first.cards) == ids
        assert [card.id for card in first.cards] == [card.id for card in again.cards]

    def test_yesterdays_swipes_do_not_use_todays_quota(self, session, make_user, make_card):
        user = make_user(daily_card_limit=1)
        make_card(user, last_seen_at=NOW.replace(hour=0, minute=0) - timedelta(minutes=1))
        fresh = make_card(user)

        result = select_eligible_cards(session, user.id, now=NOW)
        assert [card.id for card in result.cards] == [fresh.id]
