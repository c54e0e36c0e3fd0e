"""
Core utilities shared across the cocktail API.

This package hosts configuration, logging setup, business error kinds and the
security/mail/token adapters the member services are built on. Routers and
services should depend on these primitives instead of reading os.environ or
talking to smtplib/jwt directly.
"""
