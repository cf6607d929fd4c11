"""Service layer: business logic returning Result / ValueResult.

Services may import from results, domain and infrastructure layers.
They must never import from commands or output.
"""
