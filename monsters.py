# monsters.py
import random

from entities import Monster
from game_state import GameStatus
from maze_data import CellCoords


def monster_candidates(maze, coords, safe_zone_size):
    """Open neighbors of `coords` that stay outside the safe zone."""
    return [c for c in maze.open_neighbors(coords)
            if c.x >= safe_zone_size and c.y >= safe_zone_size]


def _step(monster, candidates, rng):
    here = CellCoords(monster.x, monster.y)
    if not candidates:
        return monster
    if monster.previous is not None and len(candidates) > 1:
        # Jangan langsung balik arah
        candidates = [c for c in candidates if c != monster.previous]
    nxt = rng.choice(candidates)
    return Monster(nxt.x, nxt.y, monster.style_id, here)


def move_monsters(state, safe_zone_size, rng=None):
    """
    Advance every monster one cell. All monsters move from the same snapshot;
    if any of them can reach the avatar it does, and the game is lost.
    """
    if state.status != GameStatus.PLAYING:
        return state
    rng = rng or random
    maze = state.maze
    avatar = state.avatar

    caught = False
    moved = []
    for group in state.monsters.values():
        for monster in group:
            candidates = monster_candidates(maze, (monster.x, monster.y), safe_zone_size)
            if avatar in candidates:
                caught = True
                here = CellCoords(monster.x, monster.y)
                moved.append(Monster(avatar.x, avatar.y, monster.style_id, here))
            else:
                moved.append(_step(monster, candidates, rng))

    monsters = {}
    for monster in moved:
        index = maze.coords_to_index((monster.x, monster.y))
        monsters[index] = monsters.get(index, ()) + (monster,)

    status = GameStatus.LOST if caught else state.status
    return state._replace(status=status, monsters=monsters)
