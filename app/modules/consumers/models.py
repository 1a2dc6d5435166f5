# Supabase tables: profiles (rows whose role contains 'consumer'), user_product_access
# Actual operations are handled via Supabase SDK in service.py

"""
A consumer is a profiles row holding the consumer role. Its owner is the
reseller (or admin) recorded in profiles.referred_by.

user_product_access:
- user_id: uuid (references profiles.user_id)
- product_id: uuid (references products.id)

The set of rows for a consumer is replaced wholesale whenever
subscribed_products is sent.
"""
