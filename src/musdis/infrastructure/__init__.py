"""Infrastructure layer: database schema, engine, and the catalog repository.

This layer depends on stdlib, SQLAlchemy and the results package.
It must never import from domain, services, commands, or output.
The service layer bridges between domain models and infrastructure.
"""
