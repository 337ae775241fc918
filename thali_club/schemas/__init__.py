"""
Schemas Package for the Veg Thali Club Site
===========================================

Pydantic models used for API request validation and response serialization.

Schema Organization:
--------------------
- **catering.py**: Configurator requests and the WizardView response
- **relay.py**: Catering email payload, contact inquiry, relay response
- **content.py**: Static site data returned by GET /api/data

Naming Conventions:
-------------------
- *Out: Response models (e.g., PackageOut) - what API returns
- *Request: Request bodies (e.g., OpenOrderRequest) - what client sends
- *Response: Top-level response structures (e.g., SiteDataResponse)

Usage:
------
    from thali_club.schemas.catering import WizardView
    from thali_club.schemas import CateringEmailRequest
"""

# Relay schemas
from .relay import (
    StepSelections,
    CateringForm,
    CateringEmailRequest,
    ContactInquiryRequest,
    RelayResponse,
)

# Catering configurator schemas
from .catering import (
    OpenOrderRequest,
    SelectionRequest,
    BreadRequest,
    WeightRequest,
    PartySizeRequest,
    AddOnRequest,
    ContactUpdateRequest,
    PackageOut,
    WizardView,
    SubmitResponse,
)

# Content schemas
from .content import SiteDataResponse
