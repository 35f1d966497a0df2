import math
import sys
from typing import Optional

from sqlalchemy import not_, or_
from sqlalchemy.exc import SQLAlchemyError

from ffmaxarena.extensions import db
from ffmaxarena.models import Tournament
from ffmaxarena.helpers.store import StoreError
from ffmaxarena.helpers.time import status_for

PAGE_SIZE = 9
FEATURED_LIMIT = 3
MAX_PAGE_LINKS = 5

ALL_MODES = "All Modes"
ALL_TYPES = "All Types"
GAME_MODES = ("Squad", "Duo", "Solo", "Clash Squad")
MODE_OPTIONS = (ALL_MODES,) + GAME_MODES
TYPE_OPTIONS = (ALL_TYPES, "Free", "Paid")
VIEW_OPTIONS = ("grid", "list")


def parse_listing_args(args) -> dict:
    """
    Normalise the listing query string (?q=&mode=&type=&page=&view=).
    Unknown filter values fall back to "All", page is clamped to >= 1.
    """
    q = (args.get("q") or "").strip()

    mode = (args.get("mode") or ALL_MODES).strip()
    if mode not in MODE_OPTIONS:
        mode = ALL_MODES

    entry_type = (args.get("type") or ALL_TYPES).strip()
    if entry_type not in TYPE_OPTIONS:
        entry_type = ALL_TYPES

    try:
        page = int(args.get("page", 1))
    except (TypeError, ValueError):
        page = 1
    page = max(1, page)

    view = (args.get("view") or "grid").strip().lower()
    if view not in VIEW_OPTIONS:
        view = "grid"

    return {"q": q, "mode": mode, "type": entry_type, "page": page, "view": view}


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def build_tournament_query(params: dict):
    """
    Server-side search/filter/sort for the tournaments listing.

    - q: case-insensitive substring of title OR organizer_name
    - mode: exact game_mode
    - Free: entry_fee ILIKE 'free'; Paid: everything else, NULL included
    - order: date desc, then time asc
    """
    query = Tournament.query

    q = params.get("q")
    if q:
        pattern = _like_pattern(q)
        query = query.filter(
            or_(
                Tournament.title.ilike(pattern, escape="\\"),
                Tournament.organizer_name.ilike(pattern, escape="\\"),
            )
        )

    mode = params.get("mode") or ALL_MODES
    if mode != ALL_MODES:
        query = query.filter(Tournament.game_mode == mode)

    entry_type = params.get("type") or ALL_TYPES
    if entry_type == "Free":
        query = query.filter(Tournament.entry_fee.ilike("free"))
    elif entry_type == "Paid":
        query = query.filter(
            or_(Tournament.entry_fee == None, not_(Tournament.entry_fee.ilike("free")))  # noqa: E711
        )

    return query.order_by(Tournament.date.desc(), Tournament.time.asc(), Tournament.id.asc())


def fetch_tournament_page(params: dict):
    """Return (rows, total_count) for one page of the listing."""
    page = max(1, int(params.get("page") or 1))
    query = build_tournament_query(params)

    try:
        total = query.order_by(None).count()
        rows = query.offset((page - 1) * PAGE_SIZE).limit(PAGE_SIZE).all()
    except SQLAlchemyError as e:
        db.session.rollback()
        print(f"[STORE] Error fetching tournaments: {e}", file=sys.stderr)
        raise StoreError(str(e)) from e

    return rows, total


def total_pages(total: int) -> int:
    return math.ceil((total or 0) / PAGE_SIZE)


def page_window(current: int, pages: int) -> list:
    """
    Page numbers for the pagination control, at most five numbers with
    "..." gaps. Empty when everything fits on one page.
    """
    if pages <= 1:
        return []

    half = MAX_PAGE_LINKS // 2

    if pages <= MAX_PAGE_LINKS:
        return list(range(1, pages + 1))
    if current <= half + 1:
        return list(range(1, MAX_PAGE_LINKS)) + ["...", pages]
    if current >= pages - half:
        return [1, "..."] + list(range(pages - MAX_PAGE_LINKS + 2, pages + 1))
    return [1, "..."] + list(range(current - 1, current + 2)) + ["...", pages]


def filter_args(params: dict, page: Optional[int] = None) -> dict:
    """Query-string args for links that keep the current filters."""
    args = {}
    if params.get("q"):
        args["q"] = params["q"]
    if params.get("mode") and params["mode"] != ALL_MODES:
        args["mode"] = params["mode"]
    if params.get("type") and params["type"] != ALL_TYPES:
        args["type"] = params["type"]
    if params.get("view") and params["view"] != "grid":
        args["view"] = params["view"]
    if page and page > 1:
        args["page"] = page
    return args


def featured_tournaments(tournaments, now=None, limit: int = FEATURED_LIMIT) -> list:
    """
    Home page picks from the shared cache: upcoming or live only, live ones
    first, then soonest start. TBA dates sort last.
    """
    ranked = []
    for t in tournaments or []:
        status = status_for(t, now=now)
        if status["is_upcoming"] or status["is_live"]:
            ranked.append((t, status))

    ranked.sort(key=lambda item: (not item[1]["is_live"], item[1]["time_diff_ms"]))
    return [t for t, _ in ranked[:limit]]


def site_stats(tournaments, organizers, now=None) -> dict:
    tournaments = tournaments or []
    organizers = organizers or []
    return {
        "live_tournament_count": sum(1 for t in tournaments if status_for(t, now=now)["is_live"]),
        "organizer_count": len(organizers),
        "total_players_served": sum(o.players_served or 0 for o in organizers),
        "total_tournaments": len(tournaments),
    }
