"""
Configuration Module for the Veg Thali Club Catering Site
=========================================================

This module centralizes all configuration settings, environment variables, and
constants used throughout the application. Every value is read once at module
load time; tests override them by patching the module attributes or by
building objects with explicit arguments.

Configuration Categories:
-------------------------
- **Pricing Policy**: Tax rate, default eco-set add-on fee, and the quantity
  floors for party size and weight. Catering deployments have disagreed on
  these numbers, so each deployment states its own policy here instead of the
  code assuming one.

- **Submission**: Where the configurator sends finished orders (the email
  relay endpoint) and how long it waits for an answer.

- **SMTP Relay**: Outbound mail host, port, transport mode, credentials, and
  the sender/recipient addresses for catering emails.

- **Session Management**: TTL and cache size of the in-memory cache of live
  wizard sessions. Snapshots in the database outlive the cache.

- **Rate Limiting / CORS**: Throttling of the email-sending endpoints and the
  origins allowed to call the API from the browser.

Environment Variables:
----------------------
- CATERING_TAX_RATE: Tax rate applied to per-person orders (default: "0.13")
- CATERING_ADD_ON_FEE: Default eco-set fee per person (default: "0.99")
- CATERING_MIN_PARTY_SIZE: Minimum party size (default: 15)
- CATERING_MIN_WEIGHT_KG: Minimum order weight in kg (default: "0.5")
- CATERING_MAX_PARTY_SIZE: Maximum party size (default: 5000)
- CATERING_MAX_WEIGHT_KG: Maximum order weight in kg (default: "500")
- CATERING_RELAY_URL: Email relay endpoint used on submission
- CATERING_RELAY_TIMEOUT: Relay request timeout in seconds (default: 15)
- SMTP_HOST, SMTP_PORT, SMTP_SECURE, SMTP_USER, SMTP_PASS
- CATERING_TO_EMAIL, CATERING_FROM_EMAIL
- DATABASE_URL: Snapshot store (default: local SQLite file)
- SESSION_TTL_SECONDS, SESSION_MAX_CACHE_SIZE
- RATE_LIMIT_EMAIL, RATE_LIMIT_ENABLED
- CORS_ORIGINS: Comma-separated allowed origins (default: "*")

Usage:
------
    from thali_club.config import get_pricing_policy, SMTP_HOST
"""

import os
from decimal import Decimal
from typing import List, Optional


# =============================================================================
# Pricing Policy
# =============================================================================
# HST in Ontario is 13%. Set CATERING_TAX_RATE=0 for a deployment that quotes
# tax-free totals.

CATERING_TAX_RATE: Decimal = Decimal(os.getenv("CATERING_TAX_RATE", "0.13"))

# Eco-friendly disposable set (plates, glasses, spoons, forks), per person.
# Individual catalog entries may carry their own fee.
CATERING_ADD_ON_FEE: Decimal = Decimal(os.getenv("CATERING_ADD_ON_FEE", "0.99"))

# Use 1 for "no minimum".
CATERING_MIN_PARTY_SIZE: int = int(os.getenv("CATERING_MIN_PARTY_SIZE", "15"))

CATERING_MIN_WEIGHT_KG: Decimal = Decimal(os.getenv("CATERING_MIN_WEIGHT_KG", "0.5"))

# Upper bounds on what a customer can type in; larger values are clamped.
CATERING_MAX_PARTY_SIZE: int = int(os.getenv("CATERING_MAX_PARTY_SIZE", "5000"))
CATERING_MAX_WEIGHT_KG: Decimal = Decimal(os.getenv("CATERING_MAX_WEIGHT_KG", "500"))


def get_pricing_policy():
    """
    Build the deployment's pricing policy from the values above.

    Imported lazily so config stays free of domain imports.
    """
    from .catering.pricing import PricingPolicy

    return PricingPolicy(
        tax_rate=CATERING_TAX_RATE,
        add_on_fee=CATERING_ADD_ON_FEE,
        min_party_size=CATERING_MIN_PARTY_SIZE,
        min_weight_kg=CATERING_MIN_WEIGHT_KG,
        max_party_size=CATERING_MAX_PARTY_SIZE,
        max_weight_kg=CATERING_MAX_WEIGHT_KG,
    )


# =============================================================================
# Submission Configuration
# =============================================================================

CATERING_RELAY_URL: str = os.getenv(
    "CATERING_RELAY_URL", "http://127.0.0.1:8000/api/send-catering-email"
)
CATERING_RELAY_TIMEOUT: float = float(os.getenv("CATERING_RELAY_TIMEOUT", "15"))


# =============================================================================
# SMTP Relay Configuration
# =============================================================================
# Port 465 with SMTP_SECURE=true uses implicit TLS. Port 587 with
# SMTP_SECURE=false uses STARTTLS. For Gmail, SMTP_PASS is an App Password.

SMTP_HOST: str = os.getenv("SMTP_HOST", "smtp.gmail.com")
SMTP_PORT: int = int(os.getenv("SMTP_PORT", "465"))
SMTP_SECURE: bool = os.getenv("SMTP_SECURE", "true").lower() == "true"
SMTP_USER: Optional[str] = os.getenv("SMTP_USER")
SMTP_PASS: Optional[str] = os.getenv("SMTP_PASS")
SMTP_TIMEOUT: float = float(os.getenv("SMTP_TIMEOUT", "20"))

# Fallback transport used when the primary connection fails
SMTP_FALLBACK_PORT: int = 587

CATERING_TO_EMAIL: Optional[str] = os.getenv("CATERING_TO_EMAIL") or SMTP_USER
CATERING_FROM_EMAIL: Optional[str] = os.getenv("CATERING_FROM_EMAIL") or SMTP_USER or CATERING_TO_EMAIL
CATERING_SENDER_NAME: str = "Veg Thali Club Catering"


# =============================================================================
# Database Configuration
# =============================================================================

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./thali_club.db")


# =============================================================================
# Session Management Configuration
# =============================================================================
# Live wizard sessions are cached in memory. Snapshots in the database are the
# durable copy and are read back when a client's session is not cached.

SESSION_TTL_SECONDS: int = int(os.getenv("SESSION_TTL_SECONDS", "3600"))  # 1 hour
SESSION_MAX_CACHE_SIZE: int = int(os.getenv("SESSION_MAX_CACHE_SIZE", "1000"))

# Record key of the in-progress order snapshot, one per browsing client
SNAPSHOT_KEY: str = "in-progress"

# Cookie that identifies a browsing client
CLIENT_COOKIE_NAME: str = "catering_client"


# =============================================================================
# Rate Limiting Configuration
# =============================================================================
# Only the endpoints that end in an SMTP send are limited.

RATE_LIMIT_EMAIL: str = os.getenv("RATE_LIMIT_EMAIL", "5 per minute")
RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"


def get_rate_limit_email() -> str:
    """Return the email rate limit (allows dynamic override in tests)."""
    return RATE_LIMIT_EMAIL


# =============================================================================
# CORS Configuration
# =============================================================================

_cors_origins_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in _cors_origins_env.split(",")
    if origin.strip()
] or ["*"]
