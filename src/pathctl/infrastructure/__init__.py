"""Infrastructure layer — graph store, path engine, edge-list loader.

This layer depends on stdlib, the domain layer, and NetworkX.
It must never import from services, commands, or output.
The service layer bridges between the engine and the CLI.
"""
