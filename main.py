"""
Star map command-line entry point.

    python main.py --stars stars.csv --planets planets.csv
    python main.py --stars stars.csv --search "alpha centauri" --search hip70890
    python main.py --stars stars.csv --interactive

Headless mode loads the catalogues, removes overlapping stars and reports
what the camera sees from its spawn point. --interactive opens a pygame
window and runs the frame loop (camera commands + view queries; the
selected star is shown in the window title).
"""

import argparse
import logging
import sys

from core.config import SimConfig, configure_logging
from navigation import Search, apply_command, spawn_camera
from universe import CatalogLoadError, build_universe, frame_view

logger = logging.getLogger("starmap")

W, H = 1200, 720


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Load star/planet catalogues and query the view.")
    ap.add_argument("--stars", default="stars.csv", help="star catalogue (CSV)")
    ap.add_argument("--planets", default=None, help="planet catalogue (CSV)")
    ap.add_argument("--search", action="append", default=[],
                    help="star name or HIP id to jump to (repeatable)")
    ap.add_argument("--log-level", default="INFO")
    ap.add_argument("--interactive", action="store_true",
                    help="open a pygame window and fly around")
    return ap.parse_args(argv)


def report(universe, camera, cfg: SimConfig, reports=None) -> None:
    view = frame_view(universe.get_stars(), camera, cfg.view)
    for kind, r in (reports or {}).items():
        print(f"{kind.title():8} {r.loaded} loaded, {len(r.skipped)} skipped")
    if reports and "stars" in reports:
        print(f"Overlaps: {reports['stars'].overlaps_removed} removed")
    print(f"{universe!r}")
    print(f"Camera:  {camera!r}")
    print(f"Visible: {len(view.visible)} stars")
    print(f"Target:  {view.target.name if view.target else '-'}")


def run_interactive(universe, camera, cfg: SimConfig) -> None:
    import pygame
    from navigation.input_map import InputMapper

    pygame.init()
    pygame.display.set_mode((W, H))
    pygame.event.set_grab(True)
    pygame.mouse.set_visible(False)
    clock = pygame.time.Clock()
    mapper = InputMapper()
    stars = universe.get_stars()

    running = True
    while running:
        dt = clock.tick(60) / 1000.0
        commands = []
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                running = False
            elif ev.type == pygame.KEYDOWN and ev.key == pygame.K_ESCAPE and not mapper.search_mode:
                running = False
            else:
                commands.extend(mapper.handle_event(ev))
        commands.extend(mapper.movement_commands(pygame.key.get_pressed(), dt))

        for command in commands:
            apply_command(camera, command, universe)

        view = frame_view(stars, camera, cfg.view)
        if mapper.search_mode:
            caption = f"Search: {mapper.search_text}_"
        else:
            target = view.target.name if view.target else "-"
            caption = (f"{len(view.visible)} visible | target: {target} | "
                       f"{camera.movement_speed:.3g} ly/s")
        pygame.display.set_caption(caption)
        pygame.display.flip()

    pygame.quit()


def main(argv=None) -> int:
    args = parse_args(argv)
    cfg = SimConfig.from_args(args)
    configure_logging(cfg.log_level)

    try:
        universe, reports = build_universe(cfg.stars_path, cfg.planets_path)
    except CatalogLoadError as e:
        logger.error("Error loading data: %s", e)
        return 1

    camera = spawn_camera(universe, cfg.camera)

    for query in args.search:
        found = apply_command(camera, Search(query), universe)
        print(f"Search '{query}': {found.name if found else 'not found'}")

    if args.interactive:
        run_interactive(universe, camera, cfg)
    else:
        report(universe, camera, cfg, reports)
    return 0


if __name__ == "__main__":
    sys.exit(main())
