"""
Routes package for the to-do client.

This package contains route blueprints:
- api: JSON endpoints used by in-page scripts
- views: HTML page routes for the web interface
"""
