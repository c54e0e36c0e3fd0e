"""
Persistence adapters.

Services depend on these repositories instead of issuing SQLAlchemy queries
themselves; each repository works inside the session it is given.
"""
