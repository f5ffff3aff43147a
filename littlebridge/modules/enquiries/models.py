# Postgres table: enquiries
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected table structure:

enquiries:
- id: uuid (primary key)
- center_id: uuid (foreign key to center_profiles.id, not null)
- family_profile_id: uuid (foreign key to profiles.id, nullable) - set only when is_guest is false
- guest_name, guest_email, guest_phone, guest_wechat_id: text (nullable) - contact fields
- guest_child_age, guest_child_days_needed, guest_suburb: text (nullable)
- guest_message: text (nullable) - as written by the family
- guest_message_translated: text (nullable)
- is_guest: boolean (default false)
- status: text (default 'new') - new, contacted, tour_booked, enrolled, declined
- match_factors: jsonb (default '[]')
- center_notes: text (nullable) - private to the center
- created_at, updated_at: timestamptz (default now())

Status flow: new -> contacted -> tour_booked -> enrolled, and any -> declined.
Centers may only move forward along the flow; admins may write any status.
"""
