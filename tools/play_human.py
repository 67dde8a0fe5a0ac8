"""
Human Play Mode
================

Play Planet Slicer interactively. Planets and bombs fly in from the edges;
press the key shown on an object to slice it.

Controls:
    - W/A/S/D or arrow keys: Slice objects labelled with that direction
    - Enter/Space: Start (title screen) or restart (game over)
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--fps FPS]
"""

from __future__ import annotations

import argparse
import math
import sys
from typing import Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from planet_slicer.slicer_core.config_loader import load_config, GameConfig
from planet_slicer.slicer_core.events import EventKind, GameEvent
from planet_slicer.slicer_core.game import CoreGame
from planet_slicer.slicer_core.game_state import Phase
from planet_slicer.slicer_core.state_snapshot import GameSnapshot, ObjectView


# Console lines standing in for the sound effects
EVENT_MESSAGES = {
    EventKind.GAME_START: "*intro jingle*",
    EventKind.LEVEL_UP: "*congrats fanfare*",
    EventKind.BOMB_HIT: "*explosion*",
    EventKind.PLANET_MISSED_THRESHOLD: "*sad trombone*",
}


class SlicerRenderer:
    """
    Plain renderer for human play: themed background, objects with their
    key letters, HUD and phase overlays.
    """

    def __init__(self, config: GameConfig):
        self._config = config
        self._width = config.canvas.width
        self._height = config.canvas.height

        self._text_light = (240, 240, 255)
        self._text_warn = (255, 120, 100)
        self._text_gold = (255, 215, 90)

        pygame.font.init()
        self._font_huge = pygame.font.Font(None, 72)
        self._font_large = pygame.font.Font(None, 42)
        self._font_medium = pygame.font.Font(None, 28)

        # One pre-rendered gradient per level theme
        self._backgrounds = [self._create_gradient_background(theme) for theme in config.themes]

    def _create_gradient_background(self, theme) -> pygame.Surface:
        """Vertical three-stop gradient."""
        top, middle, bottom = theme
        surface = pygame.Surface((self._width, self._height))
        half = self._height / 2
        for y in range(self._height):
            if y < half:
                a, b, t = top, middle, y / half
            else:
                a, b, t = middle, bottom, (y - half) / half
            color = tuple(int(a[i] * (1 - t) + b[i] * t) for i in range(3))
            pygame.draw.line(surface, color, (0, y), (self._width, y))
        return surface

    def render(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        """Render the complete scene."""
        screen.blit(self._backgrounds[snapshot.theme_index], (0, 0))

        for obj in snapshot.objects:
            self._draw_object(screen, obj)

        self._draw_hud(screen, snapshot)

        if snapshot.phase is Phase.TITLE:
            self._draw_title(screen)
        elif snapshot.phase is Phase.GAME_OVER:
            self._draw_game_over(screen, snapshot)
        else:
            if snapshot.splash_active:
                self._draw_centered(screen, "PLANET SLICER", self._font_huge, self._text_light, -40)
            if snapshot.leveling_up:
                self._draw_centered(screen, f"LEVEL {snapshot.level}!", self._font_huge, self._text_gold, 40)

    def _draw_object(self, screen: pygame.Surface, obj: ObjectView) -> None:
        cx, cy = int(obj.x), int(obj.y)
        radius = int(obj.radius)

        if obj.has_rings:
            ring_w = int(radius * 1.8)
            ring_rect = pygame.Rect(cx - ring_w, cy - radius // 3, ring_w * 2, (radius // 3) * 2)
            pygame.draw.ellipse(screen, obj.highlight_color, ring_rect, 2)

        pygame.draw.circle(screen, obj.color, (cx, cy), radius)
        # Highlight spot rotates with the object
        hx = cx + int(math.cos(obj.rotation) * radius * 0.4)
        hy = cy + int(math.sin(obj.rotation) * radius * 0.4)
        pygame.draw.circle(screen, obj.highlight_color, (hx, hy), max(2, radius // 3))

        if not obj.sliced:
            letter = self._font_medium.render(obj.label, True, self._text_light)
            screen.blit(letter, letter.get_rect(center=(cx, cy)))

    def _draw_hud(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        score = self._font_large.render(f"Score: {snapshot.score}", True, self._text_light)
        screen.blit(score, (self._width - score.get_width() - 16, 12))

        level = self._font_medium.render(f"Level {snapshot.level}", True, self._text_gold)
        screen.blit(level, (self._width - level.get_width() - 16, 50))

        lives_left = snapshot.max_missed - snapshot.lives_lost
        lives = self._font_medium.render(f"Lives: {lives_left}", True, self._text_warn)
        screen.blit(lives, (16, 12))

    def _draw_title(self, screen: pygame.Surface) -> None:
        self._draw_centered(screen, "PLANET SLICER", self._font_huge, self._text_light, -60)
        self._draw_centered(screen, "Match the key with the letter on the planet", self._font_medium, self._text_light, 0)
        self._draw_centered(screen, "Avoid the bombs!", self._font_medium, self._text_warn, 30)
        self._draw_centered(screen, "Press ENTER to begin", self._font_large, self._text_gold, 90)

    def _draw_game_over(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        overlay = pygame.Surface((self._width, self._height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 150))
        screen.blit(overlay, (0, 0))
        self._draw_centered(screen, "YOU LOST!", self._font_huge, self._text_warn, -50)
        self._draw_centered(screen, f"Score: {snapshot.score}", self._font_large, self._text_light, 10)
        self._draw_centered(screen, "Press ENTER to try again", self._font_medium, self._text_gold, 60)

    def _draw_centered(
        self,
        screen: pygame.Surface,
        text: str,
        font: "pygame.font.Font",
        color: Tuple[int, int, int],
        dy: int
    ) -> None:
        surface = font.render(text, True, color)
        screen.blit(surface, surface.get_rect(center=(self._width // 2, self._height // 2 + dy)))


class HumanPlayer:
    """
    Drives CoreGame from the pygame clock: one tick per displayed frame,
    key presses forwarded between ticks.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        target_fps: int = 60
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._target_fps = target_fps

        pygame.init()
        self._screen = pygame.display.set_mode((config.canvas.width, config.canvas.height))
        pygame.display.set_caption("Planet Slicer")
        self._clock = pygame.time.Clock()

        self._game = CoreGame(config=config, seed=seed, now_ms=pygame.time.get_ticks())
        self._game.subscribe(self._on_event)

        self._renderer = SlicerRenderer(config)
        self._running = True

    def run(self) -> int:
        """Run the game loop. Returns final score."""
        print("=== Planet Slicer ===")
        print("W/A/S/D or arrows to slice, ENTER to start, ESC to quit")
        print()

        while self._running:
            self._handle_events()
            result = self._game.tick(pygame.time.get_ticks())
            self._renderer.render(self._screen, result.snapshot)
            pygame.display.flip()
            self._clock.tick(self._target_fps)

        pygame.quit()
        return self._game.score

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
                    now = pygame.time.get_ticks()
                    if self._game.phase is Phase.TITLE:
                        self._game.start(now)
                    elif self._game.phase is Phase.GAME_OVER:
                        self._game.restart(now)
                else:
                    self._game.on_key(pygame.key.name(event.key))

    def _on_event(self, event: GameEvent) -> None:
        """Console stand-in for the audio consumer."""
        message = EVENT_MESSAGES.get(event.kind)
        if message is not None:
            print(f"  {message}")
        if event.kind is EventKind.LEVEL_UP:
            print(f"  Level {event.level}! (score {event.score})")
        elif event.kind is EventKind.GAME_OVER:
            print(f"\nGAME OVER ({event.reason}) - Score: {event.score}")
        elif event.kind is EventKind.GAME_START:
            print("\n=== Game Started ===\n")


def main():
    parser = argparse.ArgumentParser(description="Play Planet Slicer interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")

    args = parser.parse_args()

    try:
        config = load_config()
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            target_fps=args.fps
        )
        score = player.run()
        print(f"\nFinal Score: {score}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
