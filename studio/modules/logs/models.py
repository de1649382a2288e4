# Supabase table: logs
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- deployment_id: uuid (foreign key to deployments.id, on delete cascade)
- level: text (not null) - values: error, warning, info, debug
- message: text (not null)
- timestamp: timestamp (not null)
- function_name: text (nullable)
- request_id: text (nullable)
- user_id: uuid (foreign key to auth.users.id, not null)

Indexes: (user_id, timestamp), (deployment_id, timestamp), (deployment_id, level, timestamp)
Rows are append-only; they are removed only by LogService.clear_logs.
"""
