import math

from flask import Blueprint, request, jsonify

from ffmaxarena.helpers.listing import PAGE_SIZE, parse_listing_args, fetch_tournament_page, total_pages
from ffmaxarena.helpers.store import StoreError, get_tournament
from ffmaxarena.helpers.time import status_for, countdown_parts, STATUS_REFRESH_SECONDS


api_bp = Blueprint("api", __name__)


def _json_status(status: dict) -> dict:
    # JSON has no Infinity; TBA tournaments report null
    out = dict(status)
    if math.isinf(out["time_diff_ms"]):
        out["time_diff_ms"] = None
    return out


@api_bp.route("/api/tournaments")
def api_tournaments():
    """
    Same search/filter/page parameters as /tournaments:
      ?q=alpha&mode=Squad&type=Free&page=2
    """
    params = parse_listing_args(request.args)
    try:
        rows, total = fetch_tournament_page(params)
    except StoreError as e:
        return jsonify({"error": str(e), "items": [], "total": 0}), 503

    items = []
    for t in rows:
        item = t.to_dict()
        item["lifecycle"] = _json_status(status_for(t))
        items.append(item)

    return jsonify({
        "items": items,
        "total": total,
        "page": params["page"],
        "pages": total_pages(total),
        "page_size": PAGE_SIZE,
    })


@api_bp.route("/api/tournaments/<int:tournament_id>/status")
def api_tournament_status(tournament_id):
    """
    Polled by the browser every STATUS_REFRESH_SECONDS. `is_terminal` tells
    the page to stop polling (Completed never changes again).
    """
    try:
        tournament = get_tournament(tournament_id)
    except StoreError as e:
        return jsonify({"error": str(e)}), 503
    if tournament is None:
        return jsonify({"error": "Tournament not found"}), 404

    status = status_for(tournament)
    payload = _json_status(status)
    payload.update({
        "id": tournament.id,
        "countdown": countdown_parts(tournament.date, tournament.time),
        "is_terminal": status["is_completed"],
        "refresh_seconds": STATUS_REFRESH_SECONDS,
    })
    return jsonify(payload)
