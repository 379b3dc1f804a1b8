# =============================================================================
# core/ - Archive Domain Package
# =============================================================================
# - models/: Pydantic request models, bilingual helpers and list envelopes
# - services/: One service class per resource, built on lib/supabase_client
#
# Services raise app.exceptions errors and return plain dicts that the
# routers send back unchanged.
# =============================================================================
