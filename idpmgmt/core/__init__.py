"""Core Management API bindings.

Module Structure:
    - management/ : Management API v2 client (HTTP wrapper, models, services)

Usage Pattern:
    Configuration is not read here; pass domain and token explicitly or
    build from settings:
        from idpmgmt.config import load_settings
        from idpmgmt.core.management import Management

        m = Management.from_settings(load_settings())
"""
