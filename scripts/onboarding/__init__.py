"""
Command-line entry points for the onboarding hub.
"""
