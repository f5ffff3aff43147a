# Postgres tables: center_profiles, center_photos
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# DDL lives in littlebridge/database/schema.py

"""
Expected table structure:

center_profiles:
- id: uuid (primary key, default gen_random_uuid())
- user_id: uuid (foreign key to profiles.id, no ON DELETE action) - owning center account
- center_name: text (not null)
- slug: text (unique, not null) - public routing key, /centers/{slug}
- suburb, postcode, state, address, phone, email, website: text (nullable)
- description_en, description_zh: text (nullable)
- fee_min, fee_max: numeric (nullable) - daily fee range
- nqs_rating: text (nullable) - e.g. exceeding, meeting, working_towards
- programs: text[] (default '{}')
- staff_languages: jsonb (default '[]') - [{"language": "Mandarin", "count": 8}]
- age_groups: jsonb (default '[]') - [{"group_name": "Toddler (2-3)", "capacity": 16, "vacancies": 3}]
- is_ccs_approved: boolean (default false) - Child Care Subsidy approved
- is_founding_partner: boolean (default false)
- subscription_status: text (default 'trial')
- subscription_trial_end, founding_partner_expires_at: timestamptz (nullable)
- acecqa_url: text (nullable)
- operating_hours: jsonb (nullable) - {"monday": {"open": "7:00", "close": "18:00"}}
- created_at, updated_at: timestamptz (default now())

center_photos:
- id: uuid (primary key)
- center_id: uuid (foreign key to center_profiles.id, ON DELETE CASCADE)
- photo_url: text (not null)
- display_order: integer (default 0)
"""
