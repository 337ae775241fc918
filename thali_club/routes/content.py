"""
Site Content Routes
===================

- GET /api/data: Header links, features, chefs, gallery, menu, footer links,
  testimonials, terms & conditions and contact details in one payload.

No authentication; the data is public and static.
"""

from fastapi import APIRouter

from ..content import get_site_data
from ..schemas.content import SiteDataResponse


content_router = APIRouter(prefix="/api", tags=["Content"])


@content_router.get("/data", response_model=SiteDataResponse)
def get_data() -> SiteDataResponse:
    """Static page data for the marketing site."""
    return get_site_data()
