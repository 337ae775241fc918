"""
Routes Package for the Veg Thali Club Site
==========================================

API route definitions, one APIRouter per area:

- catering.py: Order configurator under /catering
- relay.py: Email relay endpoints under /api (rate limited)
- content.py: Static site data under /api

Routers are registered in main.py:

    from thali_club.routes import catering_router, relay_router, content_router

    app.include_router(catering_router)

Error Handling:
---------------
Routes raise HTTPException for error conditions:
- 400: Validation failed
- 404: No open order / unknown package
- 409: Submission already in flight
- 429: Too many requests (rate limited)
- 500: Email relay could not send
- 502: Submission could not reach the relay
"""

from .catering import catering_router
from .content import content_router
from .relay import relay_router

__all__ = [
    "catering_router",
    "content_router",
    "relay_router",
]
