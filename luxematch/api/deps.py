# luxematch/api/deps.py
from fastapi import Request
from luxematch.domain.models.product import Catalog
from luxematch.domain.services.session_svc import StylingService

# Catalog loaded at startup (read-only, shared by every request)
def catalog_dep(request: Request) -> Catalog:
    return request.app.state.catalog

# Styling service holding the generation client and the session store
def styling_dep(request: Request) -> StylingService:
    return request.app.state.styling
