"""
Seed Demo Data Script
Loads the demo directory (centers, photos, enquiries, educator leads, a family
and the waitlist) into a live Supabase project so a fresh deployment shows the
same content as demo mode. Rows carry fixed ids, so re-running updates them
in place instead of duplicating.

    python -m littlebridge.scripts.seed_demo_data
"""

import sys
import logging
from typing import Any, Dict, List

from supabase import Client

from littlebridge.database import demo_data
from littlebridge.database.supabase_client import get_service_supabase

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEMO_ACCOUNT_EMAIL = "demo-center@littlebridge.com.au"
DEMO_FAMILY_EMAIL = "demo-family@littlebridge.com.au"


def _without(row: Dict[str, Any], *keys: str) -> Dict[str, Any]:
    return {k: v for k, v in row.items() if k not in keys}


def upsert_rows(supabase: Client, table: str, rows: List[Dict[str, Any]]) -> int:
    """Upsert rows keyed on id; returns the number written"""
    if not rows:
        return 0
    supabase.table(table).upsert(rows, on_conflict="id").execute()
    logger.info(f"Seeded {len(rows)} rows into {table}")
    return len(rows)


def seed_demo_accounts(supabase: Client) -> int:
    # The center account owns the first listing; the family account owns the family rows
    accounts = [
        demo_data.demo_account(DEMO_ACCOUNT_EMAIL, role="center"),
        demo_data.demo_account(DEMO_FAMILY_EMAIL, role="family"),
    ]
    return upsert_rows(supabase, "profiles", accounts)


def seed_centers(supabase: Client) -> int:
    centers = demo_data.centers()
    photos = [photo for center in centers for photo in center.get("center_photos") or []]
    count = upsert_rows(supabase, "center_profiles", [_without(c, "center_photos") for c in centers])
    upsert_rows(supabase, "center_photos", photos)
    return count


def seed_enquiries(supabase: Client) -> int:
    rows = [_without(e, "center_profiles") for e in demo_data.enquiries()]
    return upsert_rows(supabase, "enquiries", rows)


def seed_families(supabase: Client) -> int:
    count = upsert_rows(supabase, "family_profiles", [demo_data.family_profile()])
    upsert_rows(supabase, "family_children", demo_data.children())
    return count


def main():
    """Main function to seed the demo directory"""
    supabase = get_service_supabase()
    if supabase is None:
        logger.error("Supabase credentials are not configured; nothing to seed")
        sys.exit(1)

    try:
        logger.info("Starting demo data seeding...")

        # Parents before children: profiles, centers, then rows referencing them
        seed_demo_accounts(supabase)
        center_count = seed_centers(supabase)
        enquiry_count = seed_enquiries(supabase)
        seed_families(supabase)
        lead_count = upsert_rows(supabase, "educator_leads", demo_data.educator_leads())
        upsert_rows(supabase, "waitlist", demo_data.waitlist())

        logger.info("Seeding completed successfully!")
        logger.info(f"Total: {center_count} centers, {enquiry_count} enquiries, {lead_count} educator leads")

    except Exception as e:
        logger.error(f"Error during seeding: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
