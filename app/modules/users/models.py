# Supabase tables: profiles, user_product_access, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

profiles:
- user_id: uuid (primary key, references auth.users.id)
- email: text (not null) - synced from auth.users
- full_name: text (nullable)
- phone: text (nullable) - stored as "<phone code> <national number>"
- country: text (nullable)
- city: text (nullable)
- avatar_url: text (nullable)
- role: text[] (not null) - subset of admin, reseller, consumer, viewer, support, user
- account_status: text (default: 'active') - active | deactive | expired_subscription
- is_systemadmin: boolean (default: false)
- referred_by: uuid (nullable, references profiles.user_id) - ownership field for
  consumers and resellers
- trial_expiry: timestamp (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

user_product_access:
- user_id: uuid (references profiles.user_id)
- product_id: uuid (references products.id)

Users, resellers and consumers are all rows of profiles; they differ only by
the roles they hold. Rows created before the text[] migration may still hold
a single text role and are read through app.core.roles.normalize_roles.
"""
