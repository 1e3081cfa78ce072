# utils.py
"""
Utility functions for the simulation framework.

Logging setup and configuration loading live here: they are used by the
entry point and do not belong to the physics or the rendering.
"""
import copy
import logging
import logging.handlers
import json
import os
from typing import Dict, Any

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary containing a "logging" key with "level",
#       "format", and "log_file" sub-keys (all optional).
#   - Side Effects: Configures the root Python logger with a console handler
#     and a rotating file handler. Creates the log directory if needed.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Outputs: The parsed JSON, with every section of DEFAULT_CONFIG present
#     and missing keys filled from it.
#   - Invariants: FileNotFoundError and json.JSONDecodeError are logged and
#     re-raised. A log_throttle_steps below 1 or a negative max_steps raises
#     ValueError.

DEFAULT_CONFIG: Dict[str, Dict[str, Any]] = {
    "simulation_parameters": {
        "seed": 42,
        "particle_count": 5,
        "ball_speed": 3.0,
        "particle_radius": 20.0,
        "color_model": "per_channel",
        "color_change_speed": 0.005,
        "hue_change_speed": 0.001,
        "hue_saturation": 1.0,
        "hue_value": 1.0,
        "parallel_advance": False
    },
    "run_control": {
        "max_steps": 0,
        "log_throttle_steps": 100,
        "profile": False
    },
    "visualization": {
        "width": 800,
        "height": 600,
        "title": "Bouncing Balls"
    },
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s - %(levelname)s - %(message)s",
        "log_file": "logs/simulation.log"
    }
}


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the logging system from a configuration dictionary.

    Sets up logging to both the console and a rotating file.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', DEFAULT_CONFIG['logging']['format'])
    log_file_path = log_config.get('log_file', DEFAULT_CONFIG['logging']['log_file'])

    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication
    if logger.hasHandlers():
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Rotates at 1MB, keeps 5 backups.
    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path, maxBytes=1024*1024, backupCount=5
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}. Log file path: {log_file_path}")


def _validate_run_control(run_params: Dict[str, Any]) -> None:
    """Rejects loop settings the main loop cannot run with."""
    log_throttle = run_params.get('log_throttle_steps')
    if not isinstance(log_throttle, int) or log_throttle < 1:
        msg = f"Configuration error: log_throttle_steps must be a positive integer, got {log_throttle!r}."
        logging.critical(msg)
        raise ValueError(msg)
    max_steps = run_params.get('max_steps')
    if not isinstance(max_steps, int) or max_steps < 0:
        msg = f"Configuration error: max_steps must be a non-negative integer (0 = unlimited), got {max_steps!r}."
        logging.critical(msg)
        raise ValueError(msg)


def load_config(path: str) -> Dict[str, Any]:
    """Loads a JSON configuration file and fills in missing defaults."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            loaded = json.load(f)
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise

    config = copy.deepcopy(DEFAULT_CONFIG)
    for section, values in loaded.items():
        if isinstance(values, dict) and section in config:
            config[section].update(values)
        else:
            config[section] = values

    _validate_run_control(config['run_control'])
    logging.info("Configuration loaded successfully.")
    return config
