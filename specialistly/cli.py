"""
Administrative commands for the Specialistly database.

Each command connects through the same settings and connection helpers as
the API, performs one maintenance task, prints the affected counts and exits.
Any failure, including an unreachable database, exits with status 1.

Usage:
    specialistly-admin clear-customers
    specialistly-admin reassign-slots --email jane@example.com --name "Jane Doe"
    specialistly-admin check-slots --email jane@example.com
"""

import argparse
import asyncio
import logging
import sys

from specialistly.core.config import settings
from specialistly.db.mongodb import (
    db, connect_to_mongo, close_mongo_connection, CUSTOMERS, MAINTENANCE_COLLECTIONS
)
from specialistly.services.slot_service import (
    reset_customer_bookings, reassign_specialist, count_slots, list_slots,
    slot_summary, is_consistent
)
from specialistly.services.creator_service import (
    list_creators, get_creator_by_email, assign_stripe_account, disconnect_stripe
)
from specialistly.schemas.appointment_slot import SlotStatus

logger = logging.getLogger(__name__)


async def clear_customers(args) -> int:
    result = await db.db[CUSTOMERS].delete_many({})
    print(f"Deleted {result.deleted_count} customer(s)")

    reset_count = await reset_customer_bookings()
    print(f"Reset {reset_count} appointment slot(s)")
    return 0


async def clear_db(args) -> int:
    if not args.yes:
        print("Refusing to clear the database without --yes")
        return 1

    for name in MAINTENANCE_COLLECTIONS:
        try:
            result = await db.db[name].delete_many({})
            print(f"Cleared {name}: {result.deleted_count} documents deleted")
        except Exception as e:
            logger.warning(f"Could not clear {name}: {e}")
    return 0


async def reassign_slots(args) -> int:
    result = await reassign_specialist(args.email, args.name, args.from_email)
    print(f"Updated {result.modifiedCount} of {result.matchedCount} slot(s)")

    available = await count_slots(args.email, SlotStatus.AVAILABLE)
    print(f"Now {available} available slot(s) for {args.email}")
    return 0


async def check_slots(args) -> int:
    summary = await slot_summary(args.email)
    scope = args.email or "all specialists"
    print(f"Slots for {scope}: {summary['total']} total, "
          f"{summary['available']} available, {summary['booked']} booked")
    if summary["withoutSpecialist"]:
        print(f"Slots with no specialistEmail: {summary['withoutSpecialist']}")

    for slot in await list_slots(args.email, limit=args.limit):
        marker = "" if is_consistent(slot) else "  [INCONSISTENT]"
        print(f"  {slot['id']} {slot['date']} {slot['startTime']}-{slot['endTime']} "
              f"({slot['status']}) {slot.get('specialistEmail')}{marker}")

    if summary["inconsistent"]:
        print(f"{summary['inconsistent']} slot(s) break the booking invariant")
        return 1
    return 0


async def list_specialists(args) -> int:
    creators = await list_creators()
    print(f"Found {len(creators)} specialist(s)")
    for creator in creators:
        print(f"  {creator.get('creatorName')} ({creator.get('email')}) "
              f"stripe={creator.get('stripeConnectStatus')}")
    return 0


async def assign_stripe(args) -> int:
    creator = await assign_stripe_account(args.email, args.account_id, args.commission)
    if not creator:
        print(f"No specialist found with email: {args.email}")
        await list_specialists(args)
        return 1

    print(f"Assigned {creator['stripeAccountId']} to {creator['creatorName']} "
          f"[{creator['stripeConnectStatus']}] commission {creator['commissionPercentage']}%")
    return 0


async def disconnect_stripe_account(args) -> int:
    if not await get_creator_by_email(args.email):
        print(f"No specialist found with email: {args.email}")
        return 1

    creator = await disconnect_stripe(args.email)
    if creator["previousStripeAccountId"]:
        print(f"Disconnected {creator['previousStripeAccountId']} from {args.email}")
    else:
        print(f"{args.email} had no Stripe account connected")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="specialistly-admin",
        description="Specialistly database maintenance"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    p = subparsers.add_parser("clear-customers", help="Delete all customers and free their booked slots")
    p.set_defaults(func=clear_customers)

    p = subparsers.add_parser("clear-db", help="Delete every document in the application collections")
    p.add_argument("--yes", action="store_true", help="Confirm the wipe")
    p.set_defaults(func=clear_db)

    p = subparsers.add_parser("reassign-slots", help="Move slots to another specialist")
    p.add_argument("--email", required=True, help="New specialist email")
    p.add_argument("--name", required=True, help="New specialist name")
    p.add_argument("--from-email", dest="from_email", default=None,
                   help="Only move slots owned by this specialist (default: all slots)")
    p.set_defaults(func=reassign_slots)

    p = subparsers.add_parser("check-slots", help="Show slot counts and invariant violations")
    p.add_argument("--email", default=None)
    p.add_argument("--limit", type=int, default=5)
    p.set_defaults(func=check_slots)

    p = subparsers.add_parser("list-specialists", help="List creator profiles")
    p.set_defaults(func=list_specialists)

    p = subparsers.add_parser("assign-stripe", help="Attach a Stripe account to a specialist")
    p.add_argument("--email", required=True)
    p.add_argument("--account-id", dest="account_id", required=True)
    p.add_argument("--commission", type=float, default=settings.DEFAULT_COMMISSION_PERCENTAGE)
    p.set_defaults(func=assign_stripe)

    p = subparsers.add_parser("disconnect-stripe", help="Remove the Stripe account of a specialist")
    p.add_argument("--email", required=True)
    p.set_defaults(func=disconnect_stripe_account)

    return parser


async def run(args) -> int:
    await connect_to_mongo()
    try:
        return await args.func(args)
    finally:
        await close_mongo_connection()


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        return asyncio.run(run(args))
    except Exception as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
