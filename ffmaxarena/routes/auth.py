from flask import Blueprint, render_template, request, redirect, flash

from ffmaxarena.helpers.auth import (
    AuthError, sign_in_with_password, establish_admin_session, clear_admin_session, is_authenticated,
)

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if request.method == "GET":
        if is_authenticated():
            return redirect("/admin")
        return render_template("login.html", email="")

    email = (request.form.get("email") or "").strip()
    password = request.form.get("password") or ""

    if not email or not password:
        flash("Email and password are required.", "error")
        return render_template("login.html", email=email), 400

    try:
        sign_in_with_password(email, password)
    except AuthError as e:
        clear_admin_session()
        flash(str(e), "error")
        return render_template("login.html", email=email), 401

    establish_admin_session(email)
    flash("Login successful! Redirecting...", "success")
    return redirect("/admin")


@auth_bp.route("/logout", methods=["POST"])
def logout():
    clear_admin_session()
    flash("Logged out.", "success")
    return redirect("/")
