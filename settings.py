# settings.py
import os
from collections import namedtuple

# Milliseconds between monster moves at speed 1
BASE_MONSTER_INTERVAL_MS = 1000

# name -> (min, max, default)
RANGES = {
    "maze_width": (5, 15, 10),
    "maze_height": (5, 15, 6),
    "num_pumpkins": (0, 10, 4),
    "num_monsters": (0, 5, 2),
    "monster_speed": (1, 5, 1),
}

SAFE_ZONE_SIZE = 2

AVATARS = ("boy", "girl", "ghost")
DEFAULT_AVATAR = "ghost"

ENV_VARS = {
    "maze_width": "MAZE_WIDTH",
    "maze_height": "MAZE_HEIGHT",
    "num_pumpkins": "MAZE_PUMPKINS",
    "num_monsters": "MAZE_MONSTERS",
    "monster_speed": "MAZE_MONSTER_SPEED",
}
AVATAR_ENV_VAR = "MAZE_AVATAR"

_Settings = namedtuple("_Settings", list(RANGES) + ["safe_zone_size", "avatar"])


class Settings(_Settings):
    """Per-session game configuration. Never changes while a session runs."""

    __slots__ = ()

    def __new__(cls, **values):
        for name, (_, _, default) in RANGES.items():
            values.setdefault(name, default)
        values.setdefault("safe_zone_size", SAFE_ZONE_SIZE)
        values.setdefault("avatar", DEFAULT_AVATAR)
        return super().__new__(cls, **values)

    @classmethod
    def from_env(cls, environ=None):
        """Read overrides from MAZE_* environment variables, then clamp."""
        environ = os.environ if environ is None else environ
        values = {}
        for name, var in ENV_VARS.items():
            raw = environ.get(var)
            if raw is None or raw.strip() == "":
                continue
            try:
                values[name] = int(raw)
            except ValueError:
                raise ValueError(f"{var} must be an integer, got {raw!r}") from None
        avatar = environ.get(AVATAR_ENV_VAR, "").strip().lower()
        if avatar:
            values["avatar"] = avatar
        return cls(**values).clamped()

    def clamped(self):
        """Force every value into its range; an unknown avatar becomes the default."""
        values = {}
        for name, (low, high, _) in RANGES.items():
            values[name] = min(max(getattr(self, name), low), high)
        if self.avatar not in AVATARS:
            values["avatar"] = DEFAULT_AVATAR
        return self._replace(**values)

    @property
    def monster_interval_ms(self):
        return BASE_MONSTER_INTERVAL_MS / self.monster_speed
