"""
High-level use cases for the cocktail API.

Each service module orchestrates repositories/adapters to implement business
rules (send a verification code, register, withdraw, update taste).
Routers call these services instead of touching the database directly.
"""
