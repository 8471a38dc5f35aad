"""
Scripts package for the Prime Onboarding Hub.

This package contains command-line scripts organized by functionality.

Subpackages:
- onboarding: Server, reconciliation, export and seeding entry points
"""

__version__ = "0.1.0"
