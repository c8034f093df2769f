# Supabase table: files, Supabase Storage bucket: files
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key, default: gen_random_uuid())
- name: text (not null)
- url: text (not null) - public URL of the stored object
- type: text (not null) - document | image | video | audio | other
- extension: text (nullable)
- size: bigint (not null) - bytes
- owner_id: uuid (foreign key to user_profiles.id, not null)
- account_id: uuid (auth.users.id of the owner, not null)
- bucket_file_id: text (not null) - object key in the storage bucket (or S3)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

A row and its stored object are created and deleted together.
"""
