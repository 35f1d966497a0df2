from datetime import date, datetime, timedelta

from ffmaxarena.helpers.listing import (
    PAGE_SIZE,
    featured_tournaments,
    fetch_tournament_page,
    filter_args,
    page_window,
    parse_listing_args,
    site_stats,
    total_pages,
)
from ffmaxarena.helpers.time import INDIA_TZ
from ffmaxarena.models import Organizer, Tournament


def _params(**kw):
    base = {"q": "", "mode": "All Modes", "type": "All Types", "page": 1, "view": "grid"}
    base.update(kw)
    return base


def _titles(rows):
    return sorted(t.title for t in rows)


class TestParseListingArgs:

    def test_defaults(self):
        assert parse_listing_args({}) == _params()

    def test_unknown_values_fall_back(self):
        params = parse_listing_args({"mode": "Battle Royale", "type": "Cheap", "page": "-3", "view": "table"})
        assert params["mode"] == "All Modes"
        assert params["type"] == "All Types"
        assert params["page"] == 1
        assert params["view"] == "grid"

    def test_non_numeric_page(self):
        assert parse_listing_args({"page": "two"})["page"] == 1

    def test_search_is_trimmed(self):
        assert parse_listing_args({"q": "  alpha  "})["q"] == "alpha"


class TestFiltering:

    def test_search_matches_title_or_organizer_case_insensitive(self, make_tournament):
        make_tournament(title="Alpha Cup", organizer_name="Zeta")
        make_tournament(title="Night Clash", organizer_name="ALPHA Esports")
        make_tournament(title="Beta Cup", organizer_name="Beta Org")

        rows, total = fetch_tournament_page(_params(q="alpha"))
        assert total == 2
        assert _titles(rows) == ["Alpha Cup", "Night Clash"]

    def test_search_wildcards_are_literal(self, make_tournament):
        make_tournament(title="100% Free Cup")
        make_tournament(title="Weekly Cup")

        rows, total = fetch_tournament_page(_params(q="%"))
        assert total == 1
        assert rows[0].title == "100% Free Cup"

    def test_mode_filter(self, make_tournament):
        make_tournament(title="A", game_mode="Squad")
        make_tournament(title="B", game_mode="Solo")
        make_tournament(title="C", game_mode="Clash Squad")

        rows, _ = fetch_tournament_page(_params(mode="Squad"))
        assert _titles(rows) == ["A"]

    def test_free_is_case_insensitive_exact_match(self, make_tournament):
        make_tournament(title="A", entry_fee="FREE")
        make_tournament(title="B", entry_fee="free")
        make_tournament(title="C", entry_fee="50")
        make_tournament(title="D", entry_fee="Free entry")

        rows, _ = fetch_tournament_page(_params(type="Free"))
        assert _titles(rows) == ["A", "B"]

    def test_paid_is_everything_not_free_including_missing(self, make_tournament):
        make_tournament(title="A", entry_fee="FREE")
        make_tournament(title="B", entry_fee="₹50")
        make_tournament(title="C", entry_fee=None)
        make_tournament(title="D", entry_fee="")
        make_tournament(title="E", entry_fee="N/A")

        rows, _ = fetch_tournament_page(_params(type="Paid"))
        assert _titles(rows) == ["B", "C", "D", "E"]

    def test_free_and_paid_partition_the_table(self, make_tournament):
        for i, fee in enumerate(["FREE", "Free", "10", None, "", "N/A", "₹100"]):
            make_tournament(title=f"T{i}", entry_fee=fee)

        _, free = fetch_tournament_page(_params(type="Free"))
        _, paid = fetch_tournament_page(_params(type="Paid"))
        _, everything = fetch_tournament_page(_params())
        assert free + paid == everything == 7

    def test_filters_combine(self, make_tournament):
        make_tournament(title="Alpha Squad Free", game_mode="Squad", entry_fee="FREE")
        make_tournament(title="Alpha Squad Paid", game_mode="Squad", entry_fee="20")
        make_tournament(title="Alpha Duo Free", game_mode="Duo", entry_fee="FREE")

        rows, total = fetch_tournament_page(_params(q="alpha", mode="Squad", type="Free"))
        assert total == 1
        assert rows[0].title == "Alpha Squad Free"


class TestPaging:

    def test_newest_date_first(self, make_tournament):
        make_tournament(title="Old", date=date(2025, 1, 1))
        make_tournament(title="New", date=date(2025, 3, 1))
        make_tournament(title="Mid", date=date(2025, 2, 1))

        rows, _ = fetch_tournament_page(_params())
        assert [t.title for t in rows] == ["New", "Mid", "Old"]

    def test_time_ascending_within_a_day(self, make_tournament):
        make_tournament(title="Late", date=date(2025, 1, 1), time="09:00 PM")
        make_tournament(title="Early", date=date(2025, 1, 1), time="06:00 PM")

        rows, _ = fetch_tournament_page(_params())
        assert [t.title for t in rows] == ["Early", "Late"]

    def test_pages_hold_nine_and_the_last_holds_the_rest(self, make_tournament):
        start = date(2025, 1, 1)
        for i in range(20):
            make_tournament(title=f"T{i:02d}", date=start + timedelta(days=i))

        first, total = fetch_tournament_page(_params(page=1))
        third, _ = fetch_tournament_page(_params(page=3))
        beyond, _ = fetch_tournament_page(_params(page=4))

        assert total == 20
        assert total_pages(total) == 3
        assert len(first) == PAGE_SIZE == 9
        assert len(third) == 2
        assert beyond == []
        assert first[0].title == "T19"
        assert [t.title for t in third] == ["T01", "T00"]

    def test_no_overlap_between_pages(self, make_tournament):
        for i in range(12):
            make_tournament(title=f"T{i}", date=date(2025, 5, 1))

        p1, _ = fetch_tournament_page(_params(page=1))
        p2, _ = fetch_tournament_page(_params(page=2))
        assert not {t.id for t in p1} & {t.id for t in p2}
        assert len(p1) + len(p2) == 12

    def test_total_pages(self):
        assert total_pages(0) == 0
        assert total_pages(9) == 1
        assert total_pages(10) == 2


class TestPageWindow:

    def test_single_page_has_no_controls(self):
        assert page_window(1, 1) == []
        assert page_window(1, 0) == []

    def test_few_pages_all_shown(self):
        assert page_window(2, 4) == [1, 2, 3, 4]

    def test_near_start(self):
        assert page_window(1, 10) == [1, 2, 3, 4, "...", 10]

    def test_near_end(self):
        assert page_window(10, 10) == [1, "...", 7, 8, 9, 10]

    def test_middle(self):
        assert page_window(5, 10) == [1, "...", 4, 5, 6, "...", 10]


def test_filter_args_drop_defaults():
    assert filter_args(_params()) == {}
    assert filter_args(_params(q="alpha", type="Free"), page=3) == {"q": "alpha", "type": "Free", "page": 3}
    assert filter_args(_params(mode="Duo", view="list"), page=1) == {"mode": "Duo", "view": "list"}


NOW = datetime(2025, 6, 1, 12, 0, tzinfo=INDIA_TZ)


def _row(title, day, time_str):
    return Tournament(title=title, organizer_name="Org", date=day, time=time_str)


def test_featured_prefers_live_then_soonest():
    today = NOW.date()
    rows = [
        _row("Done", today - timedelta(days=2), "07:00 PM"),
        _row("Far", today + timedelta(days=9), "07:00 PM"),
        _row("Live", today, "11:00 AM"),
        _row("Soon", today, "06:00 PM"),
        _row("Tomorrow", today + timedelta(days=1), "07:00 PM"),
    ]
    featured = featured_tournaments(rows, now=NOW)
    assert [t.title for t in featured] == ["Live", "Soon", "Tomorrow"]


def test_featured_empty_when_everything_completed():
    rows = [_row("Old", NOW.date() - timedelta(days=3), "07:00 PM")]
    assert featured_tournaments(rows, now=NOW) == []


def test_site_stats():
    today = NOW.date()
    rows = [_row("Live", today, "11:00 AM"), _row("Later", today, "08:00 PM")]
    orgs = [Organizer(name="A", players_served=1200), Organizer(name="B", players_served=None)]

    stats = site_stats(rows, orgs, now=NOW)
    assert stats == {
        "live_tournament_count": 1,
        "organizer_count": 2,
        "total_players_served": 1200,
        "total_tournaments": 2,
    }
