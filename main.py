import pygame
import sys
import asyncio
import os

from entities import monster_positions
from game_state import MIN_STAGE_WIDTH, GameStatus, goal_of, handle_key, maybe_start, new_game
from maze_data import CELL_SIZE, maze_to_string
from monsters import move_monsters
from settings import Settings
from timing import Throttler, TickTimer

# ==== DETECT WEB ====
IS_WEB = sys.platform == "emscripten"
DEBUG = bool(os.environ.get("MAZE_DEBUG"))

# ==== KONFIGURASI ====
SETTINGS = Settings.from_env()
KEY_WAIT_MS = 100
MARGIN = 20
PANEL_HEIGHT = 120
SPRITE_SIZE = int(CELL_SIZE * 0.7)
WALL_WIDTH = 3

KEY_NAMES = {
    pygame.K_UP: "ArrowUp",
    pygame.K_DOWN: "ArrowDown",
    pygame.K_LEFT: "ArrowLeft",
    pygame.K_RIGHT: "ArrowRight",
    pygame.K_SPACE: " ",
    pygame.K_r: "r",
}

# ==== WARNA ====
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
RED = (255, 0, 0)
GREEN = (0, 255, 0)
YELLOW = (255, 255, 0)
GRAY = (128, 128, 128)
WALL_COLOR = (96, 96, 96)
PUMPKIN_COLORS = [(255, 100 + 12 * i, 0) for i in range(11)]
MONSTER_COLORS = [(128, 0, 128), (0, 128, 128), (70, 70, 200), (30, 30, 30)]
AVATAR_COLORS = {"boy": (30, 90, 255), "girl": (255, 60, 160), "ghost": RED}

# ==== SOUND FILES ====
SOUND_FILES = {
    "CAUGHT_PUMPKIN": "jingle-1.mp3",
    "WON": "success-2.mp3",
    "LOST": "lost.mp3",
}
sound_effects = {}


def maze_origin(screen):
    """Top-left pixel of the maze, centered horizontally on the stage."""
    maze_px = SETTINGS.maze_width * CELL_SIZE
    return max((screen.get_width() - maze_px) // 2, MARGIN), MARGIN


# ==== ASYNC ASSET LOADING (PENTING UNTUK PYGBAG) ====
async def load_sounds(mixer_available):
    """Load sound effects; missing files only cost us the sound."""
    if not mixer_available:
        return
    for key, path in SOUND_FILES.items():
        if IS_WEB:
            await asyncio.sleep(0.1)
        try:
            sound_effects[key] = pygame.mixer.Sound(path)
            print(f"✅ Loaded sound: {path}")
        except (pygame.error, FileNotFoundError) as e:
            print(f"❌ Failed to load {path}: {e}")


def play(key):
    sound = sound_effects.get(key)
    if sound is None:
        return
    try:
        sound.play()
    except pygame.error as e:
        print(f"⚠️ Sound play failed: {e}")


def report(before, after):
    """Print and play whatever changed between two states."""
    if len(after.captured) > len(before.captured):
        print(f"🎃 Pumpkin captured! {len(after.pumpkins)} left")
        play("CAUGHT_PUMPKIN")
    if after.status == before.status:
        return
    if after.status == GameStatus.PLAYING:
        print(f"🎮 New maze {after.maze.width}x{after.maze.height} with "
              f"{len(after.pumpkins)} pumpkins, {len(monster_positions(after.monsters))} monsters")
        if DEBUG:
            print(maze_to_string(after.maze) + "\n")
    elif after.status == GameStatus.WON:
        print("🎉 Win!")
        play("WON")
    elif after.status == GameStatus.LOST:
        print("💀 Lost!")
        play("LOST")
    elif after.status == GameStatus.INIT:
        print("🔄 Restart")


# ==== DRAW ====
def draw_maze(screen, state):
    ox, oy = maze_origin(screen)
    maze = state.maze
    gx, gy = goal_of(maze)
    pygame.draw.rect(screen, GREEN, (ox + gx * CELL_SIZE, oy + gy * CELL_SIZE, CELL_SIZE, CELL_SIZE))

    for coords in maze:
        cell = maze.cell(coords)
        left, top = ox + coords.x * CELL_SIZE, oy + coords.y * CELL_SIZE
        right, bottom = left + CELL_SIZE, top + CELL_SIZE
        if cell.top:
            pygame.draw.line(screen, WALL_COLOR, (left, top), (right, top), WALL_WIDTH)
        if cell.left:
            pygame.draw.line(screen, WALL_COLOR, (left, top), (left, bottom), WALL_WIDTH)
        if cell.right:
            pygame.draw.line(screen, WALL_COLOR, (right, top), (right, bottom), WALL_WIDTH)
        if cell.bottom:
            pygame.draw.line(screen, WALL_COLOR, (left, bottom), (right, bottom), WALL_WIDTH)

    def center(x, y):
        return ox + x * CELL_SIZE + CELL_SIZE // 2, oy + y * CELL_SIZE + CELL_SIZE // 2

    for pumpkin in state.pumpkins.values():
        pygame.draw.circle(screen, PUMPKIN_COLORS[pumpkin.style_id], center(pumpkin.x, pumpkin.y), SPRITE_SIZE // 2)

    for group in state.monsters.values():
        for monster in group:
            cx, cy = center(monster.x, monster.y)
            rect = pygame.Rect(0, 0, SPRITE_SIZE, SPRITE_SIZE)
            rect.center = (cx, cy)
            pygame.draw.rect(screen, MONSTER_COLORS[monster.style_id], rect, border_radius=SPRITE_SIZE // 3)

    avatar = pygame.Rect(0, 0, SPRITE_SIZE, SPRITE_SIZE)
    avatar.center = center(state.avatar.x, state.avatar.y)
    pygame.draw.rect(screen, AVATAR_COLORS[SETTINGS.avatar], avatar)


def draw_panel(screen, state, font_small):
    ui_y = screen.get_height() - PANEL_HEIGHT
    pygame.draw.rect(screen, GRAY, (0, ui_y, screen.get_width(), PANEL_HEIGHT))
    text = font_small.render(f"Pumpkins left: {len(state.pumpkins)}", True, WHITE)
    screen.blit(text, (10, ui_y + 10))

    # Pumpkin shelf
    size = SPRITE_SIZE // 2
    for i, style_id in enumerate(state.captured):
        pos = (20 + size + i * (size * 2 + 6), ui_y + 40 + size)
        pygame.draw.circle(screen, PUMPKIN_COLORS[style_id], pos, size)


def draw_overlay(screen, title, color, font_huge, font_large):
    overlay = pygame.Surface(screen.get_size())
    overlay.set_alpha(150)
    overlay.fill(BLACK)
    screen.blit(overlay, (0, 0))

    title_text = font_huge.render(title, True, color)
    screen.blit(title_text, title_text.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2 - 40)))
    restart_text = font_large.render("Press SPACE to Restart", True, WHITE)
    screen.blit(restart_text, restart_text.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2 + 30)))


def setup_keyboard():
    """Turn on key repeat and return the throttler that paces it."""
    # Holding an arrow key repeats KEYDOWN; the throttler filters the repeats
    pygame.key.set_repeat(KEY_WAIT_MS, KEY_WAIT_MS)
    return Throttler(wait_ms=KEY_WAIT_MS)


# ==== MAIN GAME LOOP ====
async def main():
    pygame.init()

    # Mixer init dengan error handling
    try:
        pygame.mixer.init()
        mixer_available = True
    except pygame.error:
        mixer_available = False
        print("⚠️ Mixer tidak tersedia")

    # ==== SCREEN SETUP ====
    width = max(SETTINGS.maze_width * CELL_SIZE + 2 * MARGIN, MIN_STAGE_WIDTH + 50)
    height = SETTINGS.maze_height * CELL_SIZE + 2 * MARGIN + PANEL_HEIGHT
    screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
    pygame.display.set_caption("Pumpkin Maze Game")

    # ==== FONT ====
    font_small = pygame.font.SysFont(None, 24)
    font_large = pygame.font.SysFont(None, 48)
    font_huge = pygame.font.SysFont(None, 72)

    await load_sounds(mixer_available)

    state = new_game()
    throttler = setup_keyboard()
    monster_timer = TickTimer(SETTINGS.monster_interval_ms)

    clock = pygame.time.Clock()
    running = True

    while running:
        clock.tick(60)
        now = pygame.time.get_ticks()

        before = state
        state = maybe_start(state, screen.get_width(), SETTINGS)
        if state is not before:
            monster_timer.start(now)
            report(before, state)

        # Handle events
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE and not IS_WEB:
                screen = pygame.display.set_mode(event.size, pygame.RESIZABLE)
            elif event.type == pygame.KEYDOWN:
                key = KEY_NAMES.get(event.key)
                if key is None or not throttler.should_proceed(key, now):
                    continue
                before = state
                state = handle_key(state, key)
                report(before, state)

        # ============ MONSTERS ============
        for _ in range(monster_timer.due(now)):
            before = state
            state = move_monsters(state, SETTINGS.safe_zone_size)
            report(before, state)
        if state.status != GameStatus.PLAYING and monster_timer.running:
            monster_timer.stop()

        # ============ DRAW ============
        screen.fill(WHITE)
        if state.status == GameStatus.INIT:
            if screen.get_width() <= MIN_STAGE_WIDTH:
                banner = font_large.render("Window too small!", True, RED)
                screen.blit(banner, banner.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2)))
        else:
            draw_maze(screen, state)
            draw_panel(screen, state, font_small)
            if state.status == GameStatus.WON:
                draw_overlay(screen, "YOU WIN!", GREEN, font_huge, font_large)
            elif state.status == GameStatus.LOST:
                draw_overlay(screen, "YOU LOST", YELLOW, font_huge, font_large)

        pygame.display.flip()
        await asyncio.sleep(0)  # CRITICAL for Pygbag

    pygame.quit()


# ==== RUN ====
if __name__ == "__main__":
    asyncio.run(main())
