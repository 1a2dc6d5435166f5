# Supabase table: profiles (rows whose role contains 'reseller')
# Actual operations are handled via Supabase SDK in service.py

"""
A reseller is a profiles row holding the reseller role. Resellers may refer
further resellers and consumers; both record the referrer in
profiles.referred_by, which is also the ownership column the access guard
checks.
"""
