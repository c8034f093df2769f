# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - Account records (auth.users table)
# - Email one-time codes (sign_in_with_otp / verify_otp)
# - Session JWT generation, validation and revocation

"""
Supabase Auth calls used:
- auth.admin.create_user() - Provision the account for a new email (service role)
- auth.sign_in_with_otp() - Email a one-time code; a new code replaces the old one
- auth.verify_otp() - Exchange email + code for a session
- auth.get_user() - Resolve a session JWT to its account
- auth.admin.sign_out() - Revoke a session (service role)

Profile data (name, avatar, phone, ...) lives in user_profiles, keyed by
account_id = auth.users.id.
"""
