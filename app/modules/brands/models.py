# Supabase tables: brands
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

brands:
- id: uuid (primary key)
- owner_user_id: uuid (references auth.users.id) - ownership field used by the guard
- name: text (not null)
- website_url: text (nullable)
- niche: text (nullable)
- target_market: text (nullable)
- timezone: text (default: 'UTC')
- brand_colors: jsonb (nullable)
- logo: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

owner_user_id is a lookup reference only; deleting a brand never touches the
owner's account and vice versa.
"""
