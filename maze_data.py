# maze_data.py
import random
from collections import namedtuple

# Default ukuran cell dalam pixel (digunakan di main.py)
CELL_SIZE = 65

UP, DOWN, LEFT, RIGHT = "up", "down", "left", "right"
DIRECTIONS = (UP, RIGHT, DOWN, LEFT)

# direction -> (dx, dy, wall on this side, wall on the neighbor's side)
_STEPS = {
    UP: (0, -1, "top", "bottom"),
    RIGHT: (1, 0, "right", "left"),
    DOWN: (0, 1, "bottom", "top"),
    LEFT: (-1, 0, "left", "right"),
}

Cell = namedtuple("Cell", ["top", "right", "bottom", "left"])
CellCoords = namedtuple("CellCoords", ["x", "y"])


class Maze:
    """A finished maze: an immutable grid of cells with four wall flags each."""

    def __init__(self, rows):
        self.rows = tuple(tuple(Cell(*cell) for cell in row) for row in rows)
        self.height = len(self.rows)
        self.width = len(self.rows[0]) if self.rows else 0

    def __eq__(self, other):
        return isinstance(other, Maze) and self.rows == other.rows

    def __hash__(self):
        return hash(self.rows)

    def __repr__(self):
        return f"Maze({self.width}x{self.height})"

    def __iter__(self):
        for y in range(self.height):
            for x in range(self.width):
                yield CellCoords(x, y)

    def cell(self, coords):
        x, y = coords
        return self.rows[y][x]

    def in_bounds(self, coords):
        x, y = coords
        return 0 <= x < self.width and 0 <= y < self.height

    def coords_to_index(self, coords):
        x, y = coords
        return y * self.width + x

    def index_to_coords(self, index):
        return CellCoords(index % self.width, index // self.width)

    def has_wall(self, coords, direction):
        return getattr(self.cell(coords), _STEPS[direction][2])

    def neighbor(self, coords, direction):
        """Grid neighbor in `direction`, or None when it lies outside the maze."""
        dx, dy = _STEPS[direction][:2]
        nxt = CellCoords(coords[0] + dx, coords[1] + dy)
        return nxt if self.in_bounds(nxt) else None

    def open_neighbors(self, coords):
        """Neighbors reachable from `coords` without crossing a wall."""
        result = []
        for direction in DIRECTIONS:
            nxt = self.neighbor(coords, direction)
            if nxt is not None and not self.has_wall(coords, direction):
                result.append(nxt)
        return result

    def passages(self):
        """Set of internal passages as (index, index) pairs, lower index first."""
        found = set()
        for coords in self:
            for direction in (RIGHT, DOWN):
                nxt = self.neighbor(coords, direction)
                if nxt is not None and not self.has_wall(coords, direction):
                    found.add((self.coords_to_index(coords), self.coords_to_index(nxt)))
        return found


def generate_maze(width=10, height=6, rng=None):
    """
    Generate a perfect maze using Wilson's algorithm (loop-erased random walk).
    The result is a uniform spanning tree over the grid, with the left wall of
    the top-left cell and the right wall of the bottom-right cell removed as
    entrance and exit.
    """
    if width < 2 or height < 1:
        raise ValueError(f"Maze must be at least 2x1, got {width}x{height}")
    rng = rng or random

    # Semua dinding masih ada
    walls = [[dict(top=True, right=True, bottom=True, left=True)
              for _ in range(width)] for _ in range(height)]

    def to_coords(index):
        return index % width, index // width

    def knock_down(a, b):
        (ax, ay), (bx, by) = to_coords(a), to_coords(b)
        for dx, dy, side, opposite in _STEPS.values():
            if (ax + dx, ay + dy) == (bx, by):
                walls[ay][ax][side] = False
                walls[by][bx][opposite] = False
                return

    def grid_neighbors(index):
        x, y = to_coords(index)
        return [ny * width + nx
                for nx, ny in ((x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1))
                if 0 <= nx < width and 0 <= ny < height]

    in_maze = [False] * (width * height)
    in_maze[0] = True
    cells_in_maze = 1

    while cells_in_maze < width * height:
        start = rng.choice([i for i, inside in enumerate(in_maze) if not inside])

        # path keeps the walk in order, position maps a cell to its place in it
        path = [start]
        position = {start: 0}
        current = start
        while True:
            nxt = rng.choice(grid_neighbors(current))
            if in_maze[nxt]:
                path.append(nxt)
                for a, b in zip(path, path[1:]):
                    knock_down(a, b)
                    in_maze[a] = True
                    cells_in_maze += 1
                break
            elif nxt in position:
                # Loop: cut the path back to the first visit of nxt
                loop_start = position[nxt] + 1
                for index in path[loop_start:]:
                    del position[index]
                del path[loop_start:]
                current = nxt
            else:
                path.append(nxt)
                position[nxt] = len(path) - 1
                current = nxt

    # Pintu masuk dan keluar
    walls[0][0]["left"] = False
    walls[height - 1][width - 1]["right"] = False

    return Maze([[Cell(**cell) for cell in row] for row in walls])


def maze_to_string(maze):
    """ASCII rendering of the maze, for debugging and tests."""
    rows = maze.rows
    lines = []
    for y, row in enumerate(rows):
        above = rows[y - 1] if y > 0 else None
        last = row[-1]

        border = ["\t"]
        for x, cell in enumerate(row):
            if cell.left or (above is not None and above[x].left):
                corner = "+"
            elif cell.top:
                corner = "-"
            else:
                corner = " "
            border.append(corner + ("-" if cell.top else " "))
        if last.right or (above is not None and above[-1].right):
            border.append("+")
        else:
            border.append("-" if last.top else " ")
        lines.append("".join(border))

        body = [f"{y + 1}\t"]
        body.extend(("|" if cell.left else " ") + " " for cell in row)
        body.append("|" if last.right else " ")
        lines.append("".join(body))

    bottom = ["\t"]
    for cell in rows[-1]:
        if cell.bottom:
            bottom.append("+-" if cell.left else "--")
        else:
            bottom.append("  ")
    last = rows[-1][-1]
    if last.bottom:
        bottom.append("+" if last.right else "-")
    else:
        bottom.append(" ")
    lines.append("".join(bottom))
    return "\n".join(lines)
