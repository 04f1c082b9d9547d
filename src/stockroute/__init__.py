"""
Stockroute - autonomous item sorting loop.

Moves items out of a staging inventory into whichever destination
inventory already holds the same item type, diverting everything else
into a fallback inventory.
"""

__version__ = "1.0.0"
