from datetime import datetime

from flask import Blueprint, render_template, flash, abort

from ffmaxarena.helpers.auth import is_authenticated
from ffmaxarena.helpers.listing import featured_tournaments, site_stats
from ffmaxarena.helpers.store import load_shared_data
from ffmaxarena.helpers.time import STATUS_REFRESH_SECONDS

index_bp = Blueprint("index", __name__)

THANK_YOU_PAGES = {
    "submission": {
        "title": "Submission Sent!",
        "message": "Your tournament has been sent for review. We'll get it listed within 24-48 hours. Thanks for contributing!",
        "button_text": "See Other Tournaments",
        "button_link": "/tournaments",
    },
    "verification": {
        "title": "Application Received!",
        "message": "Your organizer verification request is in our hands. We'll review your details and get back to you soon.",
        "button_text": "Back to Organizers",
        "button_link": "/organizers",
    },
    "contact": {
        "title": "Message Sent!",
        "message": "Thanks for reaching out! We've received your message and will get back to you as soon as possible.",
        "button_text": "Back to Home",
        "button_link": "/",
    },
    "newsletter": {
        "title": "Successfully Subscribed!",
        "message": "Thank you for joining our newsletter. Keep an eye on your inbox for the latest updates.",
        "button_text": "Back to Home",
        "button_link": "/",
    },
}

DEFAULT_THANK_YOU = {
    "title": "Thank You!",
    "message": "Your request has been successfully processed.",
    "button_text": "Go Home",
    "button_link": "/",
}

# slug -> (title, paragraphs)
STATIC_PAGES = {
    "terms": (
        "Terms of Service",
        [
            "FFMaxArena lists Free Fire Max tournaments run by independent organizers. We do not run the tournaments and are not party to any entry fee or prize payment.",
            "Listings are reviewed by hand, but you are responsible for checking an event's rules before registering or paying.",
            "We may remove any listing or organizer profile that breaks our promotion guidelines.",
        ],
    ),
    "privacy": (
        "Privacy Policy",
        [
            "Forms on this site (submissions, verification requests, contact, newsletter) are forwarded by email to our admin team through a form relay service.",
            "We use the details you send only to review your request and reply to you. We do not sell your data.",
            "Ask us through the contact page to have your details removed.",
        ],
    ),
    "guidelines": (
        "Promotion Guidelines",
        [
            "Submit each tournament once, with a clear poster, the exact start date and time (IST), and the real entry fee.",
            "Prize pools must be paid as advertised. Organizers who fail to pay lose their listing and verification.",
            "No misleading titles, fake prize pools, or links to unofficial game clients.",
        ],
    ),
    "best-practices": (
        "Organizer Best Practices",
        [
            "Publish room ID and password timing in advance and stick to it.",
            "Keep a WhatsApp or Discord group for announcements and disputes.",
            "Post results and payout proof after every event to build trust with players.",
        ],
    ),
    "why-choose-us": (
        "Why Choose FFMaxArena",
        [
            "Every verified organizer is reviewed by hand before getting a badge.",
            "We are a non-profit, community-first hub for the Indian Free Fire Max scene.",
            "Live, upcoming and completed tournaments in one place, always in IST.",
        ],
    ),
}


@index_bp.app_context_processor
def inject_nav_context():
    return dict(
        is_admin=is_authenticated(),
        current_year=datetime.utcnow().year,
        status_refresh_seconds=STATUS_REFRESH_SECONDS,
    )


@index_bp.app_errorhandler(404)
def not_found(e):
    return render_template("404.html"), 404


@index_bp.route("/")
def home():
    data = load_shared_data()
    if data["error"]:
        flash("Could not load tournaments right now. Please try again later.", "error")

    return render_template(
        "index.html",
        stats=site_stats(data["tournaments"], data["organizers"]),
        featured=featured_tournaments(data["tournaments"]),
        organizers=data["organizers"],
        has_tournaments=bool(data["tournaments"]),
    )


@index_bp.route("/thank-you/<page_type>")
def thank_you(page_type):
    content = THANK_YOU_PAGES.get(page_type, DEFAULT_THANK_YOU)
    return render_template("thank_you.html", content=content)


@index_bp.route("/<slug>")
def static_page(slug):
    page = STATIC_PAGES.get(slug)
    if not page:
        abort(404)
    title, paragraphs = page
    return render_template("page.html", title=title, paragraphs=paragraphs)
