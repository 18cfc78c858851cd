# Supabase tables: user_profiles, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

user_profiles:
- id: uuid (primary key, references auth.users.id)
- email: text (not null) - synced from auth.users
- display_name: text (nullable) - name reported by the identity provider
- name: text (nullable) - name chosen by the member on first sign-in
- role: text (not null, default: 'User') - one of SuperAdmin, Admin, User
- instrument: text (nullable) - instruments.abbreviation
- part: text (nullable)
- remarks: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

A profile row is created on the member's first authenticated request.
Profiles are never deleted through the API.
"""
