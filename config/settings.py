"""
Central Configuration File

ALL configuration values live here. This is the single source of truth.

Guidelines:
- Machine-specific overrides belong in .env (or the real environment), NOT here
- Import these settings in modules: from config.settings import GPIO_SYSFS_PATH
- Keep values generic and board-agnostic
"""

import logging
import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# =============================================================================
# SYSFS CONFIGURATION
# =============================================================================

# Root of the kernel GPIO class directory (export, unexport, gpio<N>/...)
GPIO_SYSFS_PATH = os.getenv("GPIO_SYSFS_PATH", "/sys/class/gpio")

# Hardware selection: auto (detect), real (force sysfs), mock (simulation)
GPIO_HARDWARE_MODE = os.getenv("GPIO_HARDWARE_MODE", "auto")

# =============================================================================
# PIN NAMING CONFIGURATION
# =============================================================================

# Default naming mode for new controllers
# "rpi" = physical header positions, "bcm" = raw hardware pin numbers
GPIO_NAMING_MODE = os.getenv("GPIO_NAMING_MODE", "rpi")

# Optional YAML file overriding the built-in header map (position: pin/null)
GPIO_PIN_MAP_FILE = os.getenv("GPIO_PIN_MAP_FILE", "")

# =============================================================================
# TIMING CONFIGURATION
# =============================================================================

# How often each watcher polls its value file (seconds)
GPIO_WATCH_INTERVAL = float(os.getenv("GPIO_WATCH_INTERVAL", "0.1"))

# Maximum time cleanup waits for pending unexports (seconds)
GPIO_CLEANUP_TIMEOUT = float(os.getenv("GPIO_CLEANUP_TIMEOUT", "2.0"))

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOG_LEVEL = getattr(
    logging,
    os.getenv("LOG_LEVEL", "INFO").upper(),
    logging.INFO,
)
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
