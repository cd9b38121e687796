import pygame
from constants import BLACK, DT, FPS, FROZEN_CORE_FACTOR, GREY, HEIGHT, RED, TEXT_COLOR, WHITE, WIDTH
from nbody import config
from nbody.commands import Clear, Drag, Remove, Spawn, ToggleFreeze
from nbody.log import get_logger
from nbody.simulation import Simulation
from nbody.Vec2 import Vec2

from multiprocessing import Process, Manager
import gui_controller as gui_ctrl

logger = get_logger("nbody.main")

# pygame mouse buttons
LEFT, MIDDLE, RIGHT = 1, 2, 3


def draw_bodies(screen, views):
    for v in views:
        center = (int(v.x), int(v.y))
        radius = max(1, int(v.radius))
        pygame.draw.circle(screen, GREY if v.frozen else RED, center, radius)
        if v.frozen:
            pygame.draw.circle(screen, BLACK, center, max(1, int(radius * FROZEN_CORE_FACTOR)))


def draw_overlay(screen, font, fps, sim, paused):
    lines = [
        f"FPS: {fps:.0f}",
        f"Bodies: {len(sim)}",
        f"Step: {sim.stats['step_ms']:.1f} ms",
    ]
    for i, line in enumerate(lines):
        surf = font.render(line, True, TEXT_COLOR)
        screen.blit(surf, (10, 10 + i * 24))
    if paused:
        pause_text = font.render("PAUSED", True, BLACK)
        screen.blit(pause_text, (WIDTH - pause_text.get_width() - 10, 10))


def commands_for_event(event):
    """Translate one pygame event into simulation commands."""
    if event.type == pygame.MOUSEBUTTONDOWN:
        pos = Vec2(*event.pos)
        if event.button == LEFT:
            return [Spawn(pos)]
        if event.button == MIDDLE:
            return [ToggleFreeze(pos)]
    elif event.type == pygame.KEYDOWN:
        if event.key == pygame.K_r:
            return [Clear()]
        if event.key in (pygame.K_DELETE, pygame.K_BACKSPACE):
            return [Remove(Vec2(*pygame.mouse.get_pos()))]
        if event.key == pygame.K_n:
            return [Spawn()]
    return []


def sync_shared(shared, sim):
    """Pull tuning values from the control panel and push status back. Returns (pause_toggled, exit)."""
    toggled = False
    if shared.get('reset_world', False):
        sim.submit(Clear())
        shared['reset_world'] = False
    if shared.get('spawn_random', False):
        sim.submit(Spawn())
        shared['spawn_random'] = False
    if shared.get('toggle_pause', False):
        toggled = True
        shared['toggle_pause'] = False

    sim.G = float(shared.get('G', sim.G))
    sim.friction = min(0.99, max(0.0, float(shared.get('friction', sim.friction))))
    sim.max_velocity = max(1.0, float(shared.get('max_velocity', sim.max_velocity)))
    sim.substeps = max(1, int(shared.get('substeps', sim.substeps)))

    shared['bodies'] = len(sim)
    shared['step_ms'] = sim.stats['step_ms']
    shared['collisions'] = sim.stats['collisions']
    return toggled, shared.get('__exit__', False)


def main():
    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption("N-Body Playground")
    clock = pygame.time.Clock()

    sim = Simulation(WIDTH, HEIGHT)
    sim.populate(config.INITIAL_BODIES)

    running = True
    paused = False
    font = pygame.font.Font(None, 28)

    # spawn DearPyGui controller process (protected inside main)
    _mgr = Manager()
    _shared = _mgr.dict()
    _shared['G'] = sim.G
    _shared['friction'] = sim.friction
    _shared['max_velocity'] = sim.max_velocity
    _shared['substeps'] = sim.substeps
    _shared['reset_world'] = False
    _shared['spawn_random'] = False
    _shared['toggle_pause'] = False
    _shared['__exit__'] = False
    _gui_proc = Process(target=gui_ctrl.run_gui, args=(_shared,), daemon=True)
    _gui_proc.start()
    gui_alive = True

    with sim:
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE:
                    paused = not paused
                else:
                    for command in commands_for_event(event):
                        sim.submit(command)

            # right button held: drag every frame
            if pygame.mouse.get_pressed(num_buttons=3)[2]:
                sim.submit(Drag(Vec2(*pygame.mouse.get_pos())))

            # --- Handle GUI updates ---
            if gui_alive:
                try:
                    toggled, exit_requested = sync_shared(_shared, sim)
                    if toggled:
                        paused = not paused
                    if exit_requested:
                        running = False
                except Exception:
                    logger.exception("control panel unreachable, continuing without it")
                    gui_alive = False

            # --- Update ---
            if not paused:
                sim.step(DT)
            else:
                # commands still apply while paused
                sim.apply_pending()

            # --- Draw ---
            screen.fill(WHITE)
            draw_bodies(screen, sim.views())
            draw_overlay(screen, font, clock.get_fps(), sim, paused)

            pygame.display.flip()
            clock.tick(FPS)

    # cleanup: signal GUI to exit and join
    try:
        _shared['__exit__'] = True
        _gui_proc.join(timeout=1.0)
    except Exception:
        logger.warning("control panel did not shut down cleanly")

    pygame.quit()


if __name__ == "__main__":
    main()
