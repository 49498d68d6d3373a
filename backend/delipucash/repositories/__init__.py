# Repositories package init
"""
DelipuCash Backend: Persistence Gateway
=========================================

What:  Thin data-access layer over an AsyncSession.
Why:   Services express the interaction rules in terms of a small CRUD
       contract (find by id, find by composite key, create, delete-many,
       count) instead of raw SQLAlchemy statements.
"""
