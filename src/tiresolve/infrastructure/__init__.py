"""Infrastructure layer — bounded reads and filesystem probing.

Infrastructure may import from the domain layer. It must never import
from services, commands, or output. The service layer bridges between
environment, configuration, and the probing primitives.
"""
