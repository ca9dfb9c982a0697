#!/usr/bin/env python3
"""
Re-derive the ``reviewed`` flag of bookings from the reviews collection.

Adding a review and flagging its booking are two separate writes; if the
second one failed, the booking stays unflagged.  This script sets
``reviewed = true`` on every booking its owner has reviewed.  It never
clears a flag, so it is safe to run repeatedly (e.g. from cron).

Connection settings come from ``MONGODB_URI`` and ``DB_NAME``.

Usage:
    python repair_reviewed_flags.py
    python repair_reviewed_flags.py --booking-id 65a1f0c2e4b0a1b2c3d4e5f6
"""

import argparse
import sys

from hotel_booking_api.app.core.config import settings
from hotel_booking_api.app.core.db import DocumentStore
from hotel_booking_api.app.core.exceptions import StoreFailure
from hotel_booking_api.app.core.logging_config import setup_logging
from hotel_booking_api.app.services.booking_service import BookingService


def main():
    ap = argparse.ArgumentParser(description="Repair booking 'reviewed' flags.")
    ap.add_argument(
        "--booking-id",
        action="append",
        dest="booking_ids",
        help="Only repair this booking (may be repeated). Default: every reviewed booking.",
    )
    args = ap.parse_args()

    setup_logging(settings.log_level, settings.log_file or None)
    store = DocumentStore.from_settings()
    try:
        changed = BookingService(store).sync_reviewed_flags(args.booking_ids)
    except StoreFailure as e:
        print(f"[!] {e.message}: {e.error}", file=sys.stderr)
        sys.exit(1)
    finally:
        store.close()
    print(f"[+] Bookings marked as reviewed: {changed}")


if __name__ == "__main__":
    main()
