# Supabase table: cached_schemas
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- deployment_id: uuid (foreign key to deployments.id, unique, on delete cascade)
- schema: text (not null) - raw schema JSON, fetched or typed in by hand
- fetched_at: timestamp (not null)
- user_id: uuid (foreign key to auth.users.id, not null)

At most one row per deployment; writes go through SchemaService.upsert.
The parsed form (tables / indexes / functions) is never stored.
"""
