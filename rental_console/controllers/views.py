from flask import Blueprint, redirect, url_for

from ..utils.decorators import login_required

bp = Blueprint("views", __name__)


@bp.get("/")
@login_required
def home():
    return redirect(url_for("bookings.list_bookings"))
