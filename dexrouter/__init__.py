"""Multi-protocol DEX route finder.

Enumerates candidate swap paths, quotes them in Multicall3 batches, and
returns the route with the largest output.
"""

__version__ = "0.1.0"
