# main.py
"""
Main entry point for the Bouncing Balls simulation.

This script orchestrates the entire simulation lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Opens the window and spawns the balls inside it.
4. Runs the main loop: one simulation tick per rendered frame.
5. Handles clean shutdown.
"""
import logging
import cProfile
import pstats
import io

from utils import setup_logging, load_config
from constants import CONFIG_PATH


def run_loop(sim, visualizer, run_params) -> int:
    """
    Ticks the simulation once per frame until the window closes or
    max_steps is reached. Returns the number of ticks run.
    """
    log_throttle = run_params.get('log_throttle_steps', 100)
    max_steps = run_params.get('max_steps', 0)

    step_num = 0
    collisions_since_log = 0
    running = True
    while running:
        # The window may have been resized since the last frame.
        collisions_since_log += sim.tick(visualizer.current_bounds())
        step_num += 1

        if not visualizer.draw(sim.particles):
            running = False

        # Rule 2.4: Hot loops must throttle logs
        if step_num % log_throttle == 0:
            logging.info(f"Simulation step {step_num}")
            logging.debug(
                f"Step {step_num} | Collisions: {collisions_since_log} | "
                f"Kinetic energy: {sim.total_kinetic_energy():.4f}"
            )
            collisions_since_log = 0

        if max_steps and step_num >= max_steps:
            logging.info(f"Reached max_steps ({max_steps}). Stopping simulation.")
            running = False
    return step_num


def main():
    """
    The main function to run the simulation.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(CONFIG_PATH)
    except (OSError, ValueError) as e:
        print(f"FATAL: Could not load {CONFIG_PATH}. Error: {e}")
        return

    setup_logging(config)
    logging.info("--- Bouncing Balls Simulation Starting ---")

    sim_params = config['simulation_parameters']
    run_params = config['run_control']
    vis_params = config['visualization']

    from simulation import Simulation
    from visualization import Visualizer

    # The window decides the playfield, so it is created first.
    visualizer = Visualizer(vis_params)
    sim = Simulation.from_config(sim_params, visualizer.current_bounds())

    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    try:
        if profiler is not None:
            profiler.enable()
        steps = run_loop(sim, visualizer, run_params)
        if profiler is not None:
            profiler.disable()
        logging.info(f"Simulation loop finished after {steps} steps.")
    finally:
        sim.close()
        visualizer.close()

    if profiler is not None:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Bouncing Balls Simulation Shutting Down ---")


if __name__ == "__main__":
    main()
