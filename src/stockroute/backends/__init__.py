"""Inventory backends."""

from stockroute.backends.memory import MemoryInventory, MemoryWorld, load_world, save_world, world_from_dict

__all__ = ["MemoryInventory", "MemoryWorld", "load_world", "save_world", "world_from_dict"]
