"""
Stellar Census - Main Application

Generates the session's star catalog, opens the window and runs the
frame loop:
- Census screen (sky / classification / galaxy / HR diagram / census)
- Session state owned by the StateManager
- One RenderLoop, torn down when the window closes
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import pygame

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from core.config import EngineConfig
from catalogs.procedural import StarCatalogGenerator
from game.state_manager import StateManager
from ui_new.theme import Fonts, get_theme
from ui_new.screen_census import CensusScreen

TITLE = "The Stars | A Celestial Census"

logger = logging.getLogger("stellar_census")


class CensusApp:
    """
    Main application

    Manages the window, the main loop and screen coordination.
    """

    def __init__(self, config: EngineConfig):
        self.config = config
        pygame.init()

        self.screen = pygame.display.set_mode((config.width, config.height),
                                              pygame.RESIZABLE)
        pygame.display.set_caption(TITLE)
        self.clock = pygame.time.Clock()
        self.theme = get_theme()

        stars = StarCatalogGenerator(seed=config.seed).generate(config.star_count)

        self.state_manager = StateManager(config)
        self.state_manager.register_screen('CENSUS', CensusScreen(self.state_manager,
                                                                  stars, config))
        self.state_manager.switch_to('CENSUS')

        self.running = True
        logger.info("%s initialized (%dx%d, %d stars)", TITLE,
                    config.width, config.height, len(stars))

    def run(self):
        """Main loop"""
        while self.running:
            dt = self.clock.tick(self.config.fps) / 1000.0

            events = pygame.event.get()
            for event in events:
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.VIDEORESIZE:
                    self.handle_resize(event.w, event.h)

            self.state_manager.handle_input(events)
            if self.state_manager.quit_requested:
                self.running = False

            self.state_manager.update(dt)
            self.state_manager.render(self.screen)
            pygame.display.flip()

        self.quit()

    def handle_resize(self, width: int, height: int):
        """Handle window resize event"""
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        logger.debug("Window resized to: %dx%d", width, height)

    def quit(self):
        """Cleanup and quit"""
        logger.info("Shutting down")
        self.state_manager.shutdown()
        Fonts.release()
        pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point"""
    config = EngineConfig.from_args(argv)
    logging.basicConfig(level=config.log_level,
                        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s")
    try:
        app = CensusApp(config)
        app.run()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        pygame.quit()
        return 0
    except Exception:
        logger.exception("Fatal error")
        pygame.quit()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
