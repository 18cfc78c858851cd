"""
Seed Instruments Script
Populates the instruments table from app/config/instruments_config.py and can
promote the first SuperAdmin (nobody else is able to change roles).

Run from the project root:
    python -m app.scripts.seed_instruments
    python -m app.scripts.seed_instruments --super-admin conductor@example.com
"""

import argparse
import sys
from typing import List, Optional

from app.config.instruments_config import INSTRUMENTS
from app.database.supabase_client import SupabaseClient
from supabase import Client
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def seed_instruments(supabase: Client, instruments: Optional[List[dict]] = None):
    """Create missing instruments and refresh names of existing ones, keyed by abbreviation"""
    logger.info("Seeding instruments...")

    created_count = 0
    updated_count = 0

    for instrument in instruments if instruments is not None else INSTRUMENTS:
        try:
            existing = supabase.table("instruments")\
                .select("id")\
                .eq("abbreviation", instrument["abbreviation"])\
                .execute()

            if existing.data:
                supabase.table("instruments")\
                    .update({
                        "name": instrument["name"],
                        "english": instrument["english"]
                    })\
                    .eq("abbreviation", instrument["abbreviation"])\
                    .execute()
                updated_count += 1
                logger.debug(f"Updated instrument: {instrument['abbreviation']}")
            else:
                supabase.table("instruments").insert({
                    "name": instrument["name"],
                    "english": instrument["english"],
                    "abbreviation": instrument["abbreviation"]
                }).execute()
                created_count += 1
                logger.debug(f"Created instrument: {instrument['abbreviation']}")
        except Exception as e:
            logger.error(f"Error processing instrument {instrument['abbreviation']}: {e}")

    logger.info(f"Instruments seeded: {created_count} created, {updated_count} updated")
    return created_count + updated_count


def promote_super_admin(supabase: Client, email: str) -> bool:
    """Give the profile with this email the SuperAdmin role"""
    result = supabase.table("user_profiles")\
        .update({"role": "SuperAdmin"})\
        .eq("email", email)\
        .execute()
    if not result.data:
        logger.warning(f"No profile found for {email}; sign in once before promoting")
        return False
    logger.info(f"Promoted {email} to SuperAdmin")
    return True


def main(argv=None):
    parser = argparse.ArgumentParser(description="Seed instruments and bootstrap the first SuperAdmin")
    parser.add_argument("--super-admin", metavar="EMAIL", help="promote this user's profile to SuperAdmin")
    args = parser.parse_args(argv)

    try:
        supabase = SupabaseClient.get_service_client()

        count = seed_instruments(supabase)
        logger.info(f"Total: {count} instruments processed")

        if args.super_admin and not promote_super_admin(supabase, args.super_admin):
            sys.exit(1)
    except Exception as e:
        logger.error(f"Error during seeding: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
