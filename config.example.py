# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "ROTATION_APP_NAME": "App display name (default: rotation).",
    "ROTATION_LOG_LEVEL": "Console logging level (default: INFO).",
    "ROTATION_CONSOLE_ENABLED": "Run the interactive console (true) or rotate headlessly (false).",
    # Paths (gitignored)
    "ROTATION_DATA_DIR": "Local data directory, holds rotation.log (default: .local/rotation).",
    "ROTATION_TASKS_PATH": "JSON task definitions (default: built-in demo rotation).",
    # Rotation
    "ROTATION_MODE": "Task selection when rotating: next | random (default: next).",
    "ROTATION_MEMBERS": "Account has membership; false deactivates member-only tasks (default: false).",
    "ROTATION_RANDOM_MAX_ATTEMPTS": "Draws before random selection gives up (default: 1000).",
    "ROTATION_TASK_TIME_BUDGET_SECONDS": "Work time per visit before rotating; 0 disables (default: 600).",
    "ROTATION_STEP_INTERVAL_SECONDS": "Headless stepping interval (default: 1.0).",
    # Travel
    "ROTATION_TRAVEL_TIMEOUT_SECONDS": "Max wait for teleport arrival (default: 15).",
    "ROTATION_TRAVEL_POLL_SECONDS": "Arrival poll interval (default: 0.1).",
    # Offline demo
    "ROTATION_OFFLINE_SKILL_LEVEL": "Level of every skill in the offline game (default: 50).",
}
