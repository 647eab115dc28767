"""FastAPI application and routes.

This module provides the REST API for the Tokyo event finder.

## API Structure

- /api/auth - Registration, login, logout, current user
- /api/districts - District catalog
- /api/events - Event search and details
- /api/favorites - Saved events of the current user

## Authentication

Favorites and /api/auth/me require a session cookie.
Sessions are created on login and registration.
"""

from tokyo_events.api.app import create_app

__all__ = ["create_app"]
