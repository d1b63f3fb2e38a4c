# game_state.py
"""
Maze game state machine.

States: init -> playing -> won | lost. Every function here takes a GameState
and returns a new one; nothing is mutated in place, so the keyboard handler
and the monster timer always work from a consistent snapshot.
"""
from collections import namedtuple

from entities import place_entities
from maze_data import DIRECTIONS, CellCoords, DOWN, LEFT, RIGHT, UP, generate_maze

# Minimum stage width (pixels) before a session can start
MIN_STAGE_WIDTH = 650

START = CellCoords(0, 0)

KEY_DIRECTIONS = {
    "ArrowUp": UP,
    "ArrowDown": DOWN,
    "ArrowLeft": LEFT,
    "ArrowRight": RIGHT,
}
RESTART_KEYS = (" ", "r")


class GameStatus:
    INIT = "init"        # waiting for a big enough stage
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


GameState = namedtuple(
    "GameState",
    ["status", "maze", "avatar", "pumpkins", "monsters", "captured"],
    defaults=(None, None, None, None, ()),
)


def goal_of(maze):
    return CellCoords(maze.width - 1, maze.height - 1)


def new_game():
    return GameState(GameStatus.INIT)


def start_session(settings, rng=None):
    """Build a fresh maze and entity placement and enter the playing state."""
    maze = generate_maze(settings.maze_width, settings.maze_height, rng)
    pumpkins, monsters = place_entities(
        settings.maze_width,
        settings.maze_height,
        settings.num_pumpkins,
        settings.num_monsters,
        settings.safe_zone_size,
        rng,
    )
    return GameState(
        status=GameStatus.PLAYING,
        maze=maze,
        avatar=START,
        pumpkins=pumpkins,
        monsters=monsters,
        captured=(),
    )


def maybe_start(state, stage_width, settings, rng=None):
    if state.status != GameStatus.INIT or stage_width <= MIN_STAGE_WIDTH:
        return state
    return start_session(settings, rng)


def move_avatar(state, direction):
    """
    Apply one move request. Moves into a wall, off the grid, in an unknown
    direction or outside the playing state return `state` itself.
    """
    if state.status != GameStatus.PLAYING or direction not in DIRECTIONS:
        return state
    maze = state.maze
    target = maze.neighbor(state.avatar, direction)
    if target is None or maze.has_wall(state.avatar, direction):
        return state

    index = maze.coords_to_index(target)
    if state.monsters.get(index):
        return state._replace(status=GameStatus.LOST, avatar=target)

    pumpkins = state.pumpkins
    captured = state.captured
    if index in pumpkins:
        captured = captured + (pumpkins[index].style_id,)
        pumpkins = {k: v for k, v in pumpkins.items() if k != index}

    status = GameStatus.PLAYING
    if target == goal_of(maze):
        # Reaching the exit with pumpkins left behind loses the game
        status = GameStatus.WON if not pumpkins else GameStatus.LOST

    return state._replace(
        status=status, avatar=target, pumpkins=pumpkins, captured=captured)


def restart(state):
    if state.status in (GameStatus.WON, GameStatus.LOST):
        return new_game()
    return state


def handle_key(state, key):
    """Dispatch a front-end key name (e.g. "ArrowUp", " ") to the state machine."""
    if state.status == GameStatus.PLAYING:
        return move_avatar(state, KEY_DIRECTIONS.get(key))
    if key in RESTART_KEYS:
        return restart(state)
    return state
