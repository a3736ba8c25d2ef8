from flask import Blueprint, render_template, request, redirect, url_for, flash, jsonify

from ..exceptions import BookingNotFoundError, ExtraRentalDayError, InvalidInputError
from ..services.booking_service import BookingService
from ..services.duration_service import preview_duration
from ..utils.constants import BookingStatus, BookingType, MAX_HOUR_TOLERANCE, MIN_HOUR_TOLERANCE, Role
from ..utils.decorators import login_required, role_required

bp = Blueprint("bookings", __name__, url_prefix="/bookings")

WRITE_ROLES = (Role.ADMIN, Role.STAFF)


def _form_context(**extra):
    ctx = {
        "statuses": BookingStatus.ALL,
        "booking_types": BookingType.ALL,
        "tolerances": range(MIN_HOUR_TOLERANCE, MAX_HOUR_TOLERANCE + 1),
    }
    ctx.update(extra)
    return ctx


@bp.get("")
@login_required
def list_bookings():
    """Bookings list with filters. Strip empty query params and redirect to a clean URL."""
    q = {k: (v or "").strip() for k, v in request.args.items()}
    nonempty = {k: v for k, v in q.items() if v}
    if request.args and not nonempty:
        return redirect(url_for("bookings.list_bookings"))

    bookings = BookingService.list_bookings(status=nonempty.get("status"), search=nonempty.get("q"))
    return render_template("bookings/list.html", bookings=bookings,
                           status=nonempty.get("status", ""), q=nonempty.get("q", ""),
                           statuses=BookingStatus.ALL)


@bp.get("/preview")
@login_required
def preview():
    """
    Live rental-day preview for the booking form. Called on every change of the
    delivery, collection or tolerance field; unusable input yields an empty preview.
    """
    result = preview_duration(
        request.args.get("delivery"),
        request.args.get("collection"),
        request.args.get("tolerance"),
    )
    if result is None:
        return jsonify(ok=False, label="")
    return jsonify(ok=True, **result.to_dict())


@bp.get("/new")
@login_required
@role_required(*WRITE_ROLES)
def new_booking():
    return render_template("bookings/form.html", **_form_context(booking={}, action=url_for("bookings.create")))


@bp.post("")
@login_required
@role_required(*WRITE_ROLES)
def create():
    ok, msg, bid = BookingService.create_booking(request.form)
    if not ok:
        flash(msg, "danger")
        return render_template("bookings/form.html",
                               **_form_context(booking=request.form, action=url_for("bookings.create"))), 400
    flash(msg, "success")
    return redirect(url_for("bookings.summary", bid=bid))


@bp.get("/<bid>/edit")
@login_required
@role_required(*WRITE_ROLES)
def edit(bid):
    try:
        booking = BookingService.get_booking(bid)
    except BookingNotFoundError as e:
        flash(e.message, "danger")
        return redirect(url_for("bookings.list_bookings"))
    return render_template("bookings/form.html",
                           **_form_context(booking=booking, action=url_for("bookings.update", bid=bid)))


@bp.post("/<bid>")
@login_required
@role_required(*WRITE_ROLES)
def update(bid):
    try:
        ok, msg = BookingService.update_booking(bid, request.form)
    except BookingNotFoundError as e:
        flash(e.message, "danger")
        return redirect(url_for("bookings.list_bookings"))
    if not ok:
        flash(msg, "danger")
        return render_template("bookings/form.html",
                               **_form_context(booking=request.form,
                                               action=url_for("bookings.update", bid=bid))), 400
    flash(msg, "success")
    return redirect(url_for("bookings.summary", bid=bid))


@bp.post("/<bid>/cancel")
@login_required
@role_required(*WRITE_ROLES)
def cancel(bid):
    ok, msg = BookingService.cancel_booking(bid)
    flash(msg, "success" if ok else "danger")
    return redirect(url_for("bookings.list_bookings"))


@bp.get("/<bid>/summary")
@login_required
def summary(bid):
    try:
        data = BookingService.summary(bid)
    except BookingNotFoundError as e:
        flash(e.message, "danger")
        return redirect(url_for("bookings.list_bookings"))
    return render_template("bookings/summary.html", **data)


@bp.post("/<bid>/times")
@login_required
def change_times(bid):
    """Save edited delivery/collection times of day unless they add a rental day."""
    try:
        check = BookingService.submit_time_change(
            bid,
            request.form.get("delivery_time"),
            request.form.get("collection_time"),
        )
    except BookingNotFoundError as e:
        flash(e.message, "danger")
        return redirect(url_for("bookings.list_bookings"))
    except (ExtraRentalDayError, InvalidInputError) as e:
        flash(e.message, "danger")
    else:
        flash(f"Times updated ({check['duration'].label})", "success")
    return redirect(url_for("bookings.summary", bid=bid))
