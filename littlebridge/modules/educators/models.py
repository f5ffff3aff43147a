# Postgres table: educator_leads
# Actual operations are handled via Supabase SDK in service.py

"""
Expected table structure:

educator_leads:
- id: uuid (primary key)
- full_name: text (not null)
- email: text (not null, unique) - one lead per address
- suburb: text (nullable)
- languages: text[] (default '{}') - e.g. ["mandarin", "english"]
- qualification: text (nullable) - certificate_iii, diploma, bachelor, ...
- wwcc_number: text (nullable) - Working With Children Check
- created_at: timestamptz (default now())
"""
