# Supabase Auth
# Studio accounts live entirely in Supabase's auth.users table.
# The user id (auth.users.id) is the owner key stored as user_id on
# deployments, logs and cached_schemas.

"""
Calls used from service.py:
- auth.sign_up() - register a studio account
- auth.sign_in_with_password() - exchange credentials for an access token
- auth.get_user() - resolve the bearer token on every protected request
- auth.sign_out() - logout

Display name is kept in user_metadata.full_name.
"""
