"""
reset_data.py
-------------
Utility script to clear all stored data (users, bookings) from the local data.pkl file.

This script is designed for development and testing purposes.

Usage:
    $ python reset_data.py

After running this script, you can repopulate sample data by executing:
    $ python seeds.py
"""

from rental_console import create_app
from rental_console.models.store import Store


def main():
    """Clear all users and bookings from the persistent store and save it back to disk."""
    create_app()
    Store.instance().clear()

    print("data.pkl has been cleared.")
    print("Tip: run `python seeds.py` to regenerate demo data.")


if __name__ == "__main__":
    main()
