"""Domain layer — names, size arithmetic, and resolution outcomes.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""
