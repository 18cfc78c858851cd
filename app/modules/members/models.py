# Supabase table: members
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

members:
- id: uuid (primary key, default: gen_random_uuid())
- name: text (not null)
- instrument: text (not null) - instruments.abbreviation
- part: text (default: '')
- remarks: text (default: '')
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""
