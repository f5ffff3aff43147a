# Supabase Auth + profiles table
# Credentials live in Supabase Auth (auth.users); the profiles row carries the
# marketplace role and account flags. Actual operations are in service.py

"""
Supabase Auth provides:
- auth.sign_up() - Register new users (role stored in user_metadata)
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users
- auth.reset_password_for_email() - Send a password recovery link
- auth.resend() - Resend the sign-up confirmation e-mail

profiles:
- id: uuid (primary key, same value as auth.users.id)
- email: text (unique, not null)
- password_hash: text (nullable) - legacy credential column, unused with Supabase Auth
- role: text (not null) - one of family, educator, center, admin
- preferred_language: text (default 'en')
- is_active: boolean (default true)
- onboarding_completed: boolean (default false)
- created_at, updated_at: timestamptz (default now())

Role extensions:
- family -> family_profiles.user_id (1:1)
- center -> center_profiles.user_id
"""
