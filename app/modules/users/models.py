# Supabase tables: user_profiles, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

user_profiles:
- id: uuid (primary key, default: gen_random_uuid())
- account_id: uuid (unique, not null, references auth.users.id)
- email: text (not null) - synced from auth.users
- full_name: text (nullable)
- avatar: text (nullable) - URL, placeholder image until the user uploads one
- avatar_file_id: uuid (nullable, references files.id)
- avatar_bucket_file_id: text (nullable) - storage key of the avatar object
- phone_number: bigint (nullable)
- sex: text (nullable) - male | female
- location: text (nullable)
- city: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Rows are created on the first OTP request for an email and are never deleted
by the application.
"""
