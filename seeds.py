from rental_console import create_app
from rental_console.models.store import Store
from rental_console.services.booking_service import BookingService
from rental_console.utils.security import generate_hash


def ensure_user(store: Store, username: str, password: str, role: str):
    """
    Ensure a user with `username` exists in the store.
    - If exists: update password hash and role (idempotent).
    - If not:   create a new user.
    """
    u = store.find_user(username)
    if u:
        u["password_hash"] = generate_hash(password)
        u["role"] = role
        return u["user_id"]
    return store.create_user(username, generate_hash(password), role)


DEMO_BOOKINGS = [
    {
        "client_name": "Giulia Rossi", "client_email": "giulia@example.com",
        "car_model": "Ferrari Roma", "car_plate": "GX123AB",
        "delivery_datetime": "2030-07-01T10:00", "collection_datetime": "2030-07-06T09:00",
        "rental_day_hour_tolerance": "1", "rental_price_gross": "6500", "amount_paid": "2000",
        "security_deposit_amount": "5000", "status": "confirmed",
    },
    {
        "booking_type": "agency", "agency_name": "Riviera Travel",
        "client_name": "James Carter", "car_model": "Lamborghini Urus", "car_plate": "FY987ZZ",
        "delivery_datetime": "2030-08-10T14:00", "collection_datetime": "2030-08-12T16:30",
        "rental_day_hour_tolerance": "3", "rental_price_gross": "3200", "status": "draft",
    },
]


def main():
    app = create_app()
    with app.app_context():
        store = Store.instance()

        ensure_user(store, "admin", "Admin123", "admin")
        ensure_user(store, "staff", "Staff123", "staff")

        if not store.bookings:
            for form in DEMO_BOOKINGS:
                ok, msg, _ = BookingService.create_booking(form)
                if not ok:
                    print(f"Seed booking skipped: {msg}")

        store.save()

        print("Seed complete.")
        print("Admin login: admin / Admin123")
        print("Staff login: staff / Staff123")


if __name__ == "__main__":
    main()
