"""
Services Package for the Veg Thali Club Site
============================================

Stateful helpers that sit between the routes and the catering core.

Available Services:
-------------------
- **wizard_session**: In-memory cache of each client's open order, backed by
  snapshots written in the background

Usage:
------
    from thali_club.services.wizard_session import get_wizard_session, save_wizard_session
"""

from . import wizard_session

__all__ = ["wizard_session"]
