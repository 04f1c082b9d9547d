"""
Shared helpers for stockroute tests.
"""

import asyncio

from stockroute.core.inventory import ItemStack


def run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio needed)."""
    return asyncio.run(coro)


def stack(item_id, quantity=1, label=None) -> ItemStack:
    return ItemStack(item_id=item_id, quantity=quantity, label=label)
