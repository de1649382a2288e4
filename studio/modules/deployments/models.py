# Supabase table: deployments
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- name: text (not null)
- url: text (not null) - base URL of the remote Convex deployment
- deploy_key: text (not null) - sent as "Authorization: Convex <deploy_key>"; never returned by the API
- environment: text (not null) - values: dev, staging, prod
- status: text (not null, default: 'pending') - values: connected, error, pending
- last_checked: timestamp (nullable)
- error_message: text (nullable)
- user_id: uuid (foreign key to auth.users.id, not null)
- created_at: timestamp (default: now())

Indexes: (user_id), (user_id, environment)
"""
