import atexit
import logging
import os
import pickle
import threading
import uuid
from pathlib import Path

from ..utils.security import generate_hash

logger = logging.getLogger(__name__)

# ---- Paths ----
BASE_DIR = Path(__file__).resolve().parents[2]
DEFAULT_DATA_PATH = BASE_DIR / "data.pkl"


class Store:
    _inst = None
    _inst_lock = threading.Lock()
    _atexit_registered = False

    def __init__(self, path: str | os.PathLike | None = None):
        self.path = str(path or DEFAULT_DATA_PATH)
        self.users: dict[str, dict] = {}
        self.bookings: dict[str, dict] = {}
        self._rw = threading.RLock()

        logger.info("[Store] Using file: %s", self.path)
        self._load()

        # Default admin account, only for a fresh file
        if not os.path.exists(self.path) or (not self.users and not self.bookings):
            if not any(u.get("role") == "admin" for u in self.users.values()):
                uid = str(uuid.uuid4())
                self.users[uid] = {
                    "user_id": uid,
                    "username": "admin",
                    "password_hash": generate_hash("Admin123"),
                    "role": "admin",
                }
                self._dump()

        # Automatically save on exit (skipped in test environments)
        if not Store._atexit_registered and os.getenv("APP_ENV") != "test":
            atexit.register(self.save)
            Store._atexit_registered = True

    # ---------- Singleton ----------
    @classmethod
    def instance(cls, path: str | os.PathLike | None = None):
        """Return the global singleton instance of Store."""
        with cls._inst_lock:
            if cls._inst is None:
                cls._inst = Store(path or DEFAULT_DATA_PATH)
        return cls._inst

    @classmethod
    def reset_instance(cls, store: "Store | None" = None):
        """Replace the singleton (used by tests and reset_data.py)."""
        with cls._inst_lock:
            cls._inst = store

    # ---------- Persistence ----------
    def _load(self):
        """Load data from the pickle file, or start empty if unavailable or invalid."""
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path, "rb") as f:
                data = pickle.load(f)
        except (OSError, pickle.UnpicklingError, EOFError) as e:
            logger.warning("[Store] Load failed (%s); starting empty.", e)
            return

        if isinstance(data, dict):
            self.users = data.get("users", {}) or {}
            self.bookings = data.get("bookings", {}) or {}
            logger.info("[Store] Loaded: users=%d, bookings=%d", len(self.users), len(self.bookings))
        else:
            # Incompatible data format: back up the old file and start empty
            bak = self.path + ".bak"
            try:
                os.replace(self.path, bak)
                logger.warning("[Store] Incompatible store (%s); backed up to %s. Starting empty.",
                               type(data).__name__, bak)
            except OSError as e:
                logger.error("[Store] Backup failed: %s", e)

    def _dump(self):
        """Write the in-memory data to the pickle file safely (atomic replace)."""
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        tmp = self.path + ".tmp"
        payload = {
            "users": self.users,
            "bookings": self.bookings,
        }
        with open(tmp, "wb") as f:
            pickle.dump(payload, f, protocol=pickle.HIGHEST_PROTOCOL)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, self.path)

    def save(self):
        """Thread-safe save method."""
        with self._rw:
            logger.debug("[Store] Saving to %s ...", self.path)
            self._dump()

    # ---------- Users ----------
    def user_exists(self, username: str) -> bool:
        """Return True if the given username already exists."""
        return any(u["username"] == username for u in self.users.values())

    def find_user(self, username: str) -> dict | None:
        """Find a user by username."""
        for u in self.users.values():
            if u["username"] == username:
                return u
        return None

    def create_user(self, username: str, password_hash: str, role: str) -> str:
        """Create a new user and return its ID."""
        with self._rw:
            if self.user_exists(username):
                raise ValueError("Username already exists")
            uid = str(uuid.uuid4())
            self.users[uid] = {
                "user_id": uid,
                "username": username,
                "password_hash": password_hash,
                "role": role,
            }
            self._dump()
            return uid

    # ---------- Bookings ----------
    def get_booking(self, booking_id: str) -> dict | None:
        return self.bookings.get(str(booking_id))

    def create_booking(self, b: dict) -> str:
        """Create a new booking record and return its ID."""
        with self._rw:
            bid = str(uuid.uuid4())
            b = dict(b)
            b["booking_id"] = bid
            self.bookings[bid] = b
            self._dump()
            return bid

    def update_booking(self, booking_id: str, updates: dict) -> bool:
        """Update an existing booking by ID."""
        with self._rw:
            bid = str(booking_id)
            if bid not in self.bookings:
                return False
            self.bookings[bid].update(updates)
            self._dump()
            return True

    def clear(self):
        with self._rw:
            self.users.clear()
            self.bookings.clear()
            self._dump()
