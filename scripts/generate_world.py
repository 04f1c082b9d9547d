#!/usr/bin/env python
"""
Generate a random world file for trying out the sorting loop.

Usage:
    python scripts/generate_world.py world.yaml
    python scripts/generate_world.py world.yaml --chests 137 --items 40 --seed 7

Then:
    stockroute run world.yaml --cycles 3
"""

import argparse
import random
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from stockroute.backends.memory import MemoryInventory, MemoryWorld, save_world
from stockroute.core.inventory import ItemStack

ITEMS = [
    ("minecraft:cobblestone", "Cobblestone"),
    ("minecraft:stone", "Stone"),
    ("minecraft:oak_log", "Oak Log"),
    ("minecraft:iron_ingot", "Iron Ingot"),
    ("minecraft:redstone", "Redstone Dust"),
    ("minecraft:glass", "Glass"),
    ("minecraft:sand", "Sand"),
    ("minecraft:coal", "Coal"),
    ("minecraft:string", "String"),
    ("minecraft:bone", "Bone"),
]


def build_world(chests: int, items: int, rng: random.Random) -> MemoryWorld:
    source = MemoryInventory("minecraft:chest_3")
    world = MemoryWorld([source], source=source.name)
    world.add(MemoryInventory("charm:variant_chest_2"))

    # Each chest is seeded with at most one item type; some stay empty
    for i in range(4, 4 + chests):
        chest = world.add(MemoryInventory(f"minecraft:chest_{i}"))
        if rng.random() < 0.6:
            item_id, label = rng.choice(ITEMS)
            chest.slots[1] = ItemStack(item_id=item_id, quantity=rng.randint(1, 64), label=label)

    for slot in range(1, min(items, source.size) + 1):
        item_id, label = rng.choice(ITEMS + [("minecraft:diamond", "Diamond")])
        source.slots[slot] = ItemStack(item_id=item_id, quantity=rng.randint(1, 64), label=label)

    return world


def main():
    parser = argparse.ArgumentParser(description="Generate a random stockroute world file")
    parser.add_argument("output", type=Path)
    parser.add_argument("--chests", type=int, default=40, help="Destination chests (default: 40)")
    parser.add_argument("--items", type=int, default=20, help="Occupied source slots (default: 20)")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    world = build_world(args.chests, args.items, random.Random(args.seed))
    save_world(world, args.output)
    print(f"Wrote {len(world)} inventories to {args.output}")
    print("Run with: STOCKROUTE_LAST_INDEX=%d stockroute run %s --cycles 3" % (3 + args.chests, args.output))


if __name__ == "__main__":
    main()
