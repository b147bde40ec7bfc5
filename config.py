"""
config.py — Application Configuration
======================================
Defaults live on `Config`.  The app factory layers, in order:

  1. Config                       (this module)
  2. GRAPH_BUILDER_* env vars     e.g. GRAPH_BUILDER_STEP_DELAY=0.25
  3. overrides passed to create_app()

Env values are parsed as JSON where possible, so numbers and booleans
arrive typed.
"""

import os


class Config:
    # playback
    STEP_DELAY: float = 0.5                 # seconds between highlighted steps
    DEFAULT_SPEED: str = "medium"

    # persistence: empty or None disables the snapshot file
    SNAPSHOT_PATH: str = os.path.join(os.getcwd(), "graph-builder-state.json")

    # server
    HOST: str = "127.0.0.1"
    PORT: int = 5000
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"


ENV_PREFIX = "GRAPH_BUILDER"
