# Supabase table: instruments
# This file documents the expected database schema
# Rows are seeded by app/scripts/seed_instruments.py

"""
Expected Supabase table structure:

instruments:
- id: uuid (primary key, default: gen_random_uuid())
- name: text (not null) - Korean display name
- english: text (not null)
- abbreviation: text (not null, unique) - stored on members and profiles
"""
