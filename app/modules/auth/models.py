# Supabase Auth
# This module uses Supabase's built-in authentication system
# Console profiles live in the public.profiles table (see users/models.py)

"""
Supabase Auth provides:
- auth.sign_in_with_password() - Authenticate console users
- auth.get_user() - Resolve the caller from a bearer JWT
- auth.sign_out() - Logout users
- auth.admin.create_user() / delete_user() / update_user_by_id() /
  get_user_by_id() - account administration (service role key only)

Every request is authenticated with auth.get_user(); the caller's roles are
then read fresh from profiles, never from a cache.
"""
