# entities.py
import random
from collections import namedtuple

from maze_data import CellCoords

# Jumlah gambar pumpkin-XX.png / monster yang tersedia
NUM_PUMPKIN_STYLES = 11
NUM_MONSTER_STYLES = 4

Pumpkin = namedtuple("Pumpkin", ["x", "y", "style_id"])
Monster = namedtuple("Monster", ["x", "y", "style_id", "previous"])


class PlacementError(ValueError):
    """Raised when there are not enough free cells for the requested entities."""


def _index(width, x, y):
    return y * width + x


def monster_region(width, height, safe_zone_size):
    """Cells a monster may stand on: outside the safe zone, off start and goal."""
    if safe_zone_size < 0:
        raise ValueError(f"safe_zone_size must not be negative, got {safe_zone_size}")
    goal = (width - 1, height - 1)
    return [(x, y)
            for y in range(safe_zone_size, height)
            for x in range(safe_zone_size, width)
            if (x, y) != (0, 0) and (x, y) != goal]


def place_pumpkins(width, height, count, rng=None, keep_free=(), reserve=0):
    """
    Scatter `count` pumpkins over the maze, never on the start cell (0, 0),
    the goal cell (width-1, height-1) or on top of each other.
    At least `reserve` cells of `keep_free` are left without a pumpkin.
    Returns {cell index: Pumpkin}.
    """
    rng = rng or random
    goal = (width - 1, height - 1)
    free = [(x, y) for y in range(height) for x in range(width)
            if (x, y) != (0, 0) and (x, y) != goal]
    keep_free = set(keep_free) & set(free)
    if count > len(free) - min(reserve, len(keep_free)):
        raise PlacementError(
            f"Cannot place {count} pumpkins in a {width}x{height} maze "
            f"({len(free)} free cells, {reserve} kept for monsters)")

    # How many more pumpkins may land inside keep_free
    budget = len(keep_free) - reserve
    pumpkins = {}
    for _ in range(count):
        if budget <= 0:
            free = [cell for cell in free if cell not in keep_free]
        x, y = free.pop(rng.randrange(len(free)))
        if (x, y) in keep_free:
            budget -= 1
        pumpkins[_index(width, x, y)] = Pumpkin(x, y, rng.randrange(NUM_PUMPKIN_STYLES))
    return pumpkins


def place_monsters(width, height, count, safe_zone_size, pumpkins=None, rng=None):
    """
    Scatter `count` monsters outside the safe zone (x < safe_zone_size or
    y < safe_zone_size), off the start and goal cells, off pumpkins and off
    each other. Returns {cell index: (Monster,)}; monsters start with no
    previous position.
    """
    rng = rng or random
    pumpkins = pumpkins or {}
    free = [(x, y) for x, y in monster_region(width, height, safe_zone_size)
            if _index(width, x, y) not in pumpkins]
    if count > len(free):
        raise PlacementError(
            f"Cannot place {count} monsters in a {width}x{height} maze with a "
            f"safe zone of {safe_zone_size} ({len(free)} free cells)")

    monsters = {}
    for x, y in rng.sample(free, count):
        monster = Monster(x, y, rng.randrange(NUM_MONSTER_STYLES), None)
        monsters[_index(width, x, y)] = (monster,)
    return monsters


def place_entities(width, height, num_pumpkins, num_monsters, safe_zone_size, rng=None):
    """
    Place pumpkins first, leaving enough of the monster region empty for
    `num_monsters`, then monsters around them. Returns (pumpkins, monsters).
    """
    region = monster_region(width, height, safe_zone_size)
    if num_monsters > len(region):
        raise PlacementError(
            f"Cannot place {num_monsters} monsters in a {width}x{height} maze with a "
            f"safe zone of {safe_zone_size} ({len(region)} free cells)")
    pumpkins = place_pumpkins(width, height, num_pumpkins, rng,
                              keep_free=region, reserve=num_monsters)
    monsters = place_monsters(width, height, num_monsters, safe_zone_size, pumpkins, rng)
    return pumpkins, monsters


def monster_positions(monsters):
    """Coordinates of every monster, in map order."""
    return [CellCoords(m.x, m.y) for group in monsters.values() for m in group]
