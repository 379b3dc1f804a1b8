# =============================================================================
# app/ - Baakh API Web Layer
# =============================================================================
# HTTP side of the archive:
# - main.py: FastAPI app, CORS, exception handlers, router mounting
# - config.py: Settings read from the environment / .env
# - auth/: Supabase JWT verification and the admin/editor check
# - routers/: One module per resource (poets, couplets, timeline, ...)
#
# Routes parse parameters and call core/services; they hold no queries.
# =============================================================================
