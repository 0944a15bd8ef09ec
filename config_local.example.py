# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env` for most settings. This file should contain only safe overrides.
"""

# Example: rotate randomly instead of in order
# ROTATION_MODE = "random"

# Example: members account (keeps member-only tasks active)
# MEMBERS = True

# Example: use your own task definitions
# TASKS_PATH = "tasks.json"
