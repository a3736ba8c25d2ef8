from rental_console.services.user_service import UserService
from rental_console.utils.security import generate_hash, check_hash


def test_password_hash_roundtrip():
    pw = "Secret123"
    h = generate_hash(pw)
    assert check_hash(pw, h)
    assert not check_hash("wrong", h)
    assert not check_hash(pw, "")


def test_create_user_and_authenticate(store):
    ok, msg = UserService.create_user("marco", "staff", "Marco123")
    assert ok, msg
    assert UserService.authenticate("marco", "Marco123")["role"] == "staff"
    assert UserService.authenticate("marco", "nope") is None

    ok, msg = UserService.create_user("marco", "staff", "x")
    assert not ok and msg == "Username exists"

    ok, msg = UserService.create_user("luca", "client", "x")
    assert not ok
