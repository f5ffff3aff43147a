# Postgres tables: family_profiles, family_children
# Actual operations are handled via Supabase SDK in service.py

"""
Expected table structure:

family_profiles:
- id: uuid (primary key)
- user_id: uuid (unique, foreign key to profiles.id) - one profile per family account
- family_name, suburb, postcode, state: text (nullable)
- mobile_phone, wechat_id: text (nullable)
- preferred_contact: text (default 'email') - email, phone, wechat, sms
- priorities: text[] (default '{}')
- created_at, updated_at: timestamptz

family_children:
- id: uuid (primary key)
- family_id: uuid (foreign key to family_profiles.id, ON DELETE CASCADE)
- child_name: text (nullable)
- date_of_birth: date (nullable)
- days_needed: text[] (default '{}') - e.g. ["monday", "wednesday"]
- notes: text (nullable)

A family profile is created on demand: the first profile save or the first
added child inserts it.
"""
