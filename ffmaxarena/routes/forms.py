from flask import Blueprint, render_template, request, redirect, flash

from ffmaxarena.helpers.relay import RelayError, relay_contact_message, relay_newsletter_signup
from ffmaxarena.helpers.validation import clean_contact_form, clean_newsletter_form

forms_bp = Blueprint("forms", __name__)


@forms_bp.route("/contact", methods=["GET", "POST"])
def contact():
    if request.method == "GET":
        return render_template("contact.html", values={}, errors={})

    values, errors = clean_contact_form(request.form)
    if errors:
        return render_template("contact.html", values=values, errors=errors), 400

    try:
        relay_contact_message(values)
    except RelayError as e:
        flash(str(e), "error")
        return render_template("contact.html", values=values, errors={}), 502

    return redirect("/thank-you/contact")


@forms_bp.route("/newsletter", methods=["POST"])
def newsletter():
    values, errors = clean_newsletter_form(request.form)
    back = request.referrer or "/"

    if errors:
        flash(errors["email"], "error")
        return redirect(back)

    try:
        relay_newsletter_signup(values["email"])
    except RelayError as e:
        flash(str(e), "error")
        return redirect(back)

    return redirect("/thank-you/newsletter")
