# Supabase tables: products
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

products:
- id: uuid (primary key)
- name: text (not null)
- description: text (not null)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Products carry no ownership column, so only admins pass the resource guard.
"""
