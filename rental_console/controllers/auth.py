from flask import Blueprint, render_template, request, redirect, url_for, session, flash

from ..services.user_service import UserService

bp = Blueprint("auth", __name__, url_prefix="/")


@bp.get("login")
def login_form():
    return render_template("auth/login.html")


@bp.post("login")
def login_submit():
    username = request.form.get("username", "").strip()
    password = request.form.get("password", "")

    user = UserService.authenticate(username, password)
    if not user:
        flash("Invalid credentials", "danger")
        return redirect(url_for("auth.login_form"))

    session.clear()
    session["uid"] = user["user_id"]
    session["role"] = user["role"]
    session["username"] = user["username"]
    return redirect(url_for("bookings.list_bookings"))


@bp.get("logout")
def logout():
    session.clear()
    flash("Logged out")
    return redirect(url_for("auth.login_form"))
