# Supabase table: schedules
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

schedules:
- id: uuid (primary key, default: gen_random_uuid())
- member_id: text (not null, unique) - user_profiles.id of the owning member
- member_name: text (not null) - snapshot of the member's name at save time
- available_days: jsonb (default: '[]') - legacy weekday labels "월".."일"
- available_dates: jsonb (default: '[]') - sorted "YYYY-MM-DD" strings
- date_notes: jsonb (default: '{}') - {"YYYY-MM-DD": "memo"}
- week_start_date: text (nullable) - "YYYY-MM-DD"
- updated_at: timestamp (default: now())

When available_dates is non-empty, available_days is ignored by every reader.
"""
