"""
Task subsystem.

Components:
- task_models.py: data structures (TaskSpec, Task, Skill, TeleportAnchor) and travel
- work_timer.py: pausable per-task stopwatch
- task_registry.py: the rotation state machine (switch_to / next / random_next)
- task_loader.py: JSON task definitions + built-in demo rotation
- rotation.py: caller-side stepping policy (budgets, travel failures)
- task_api.py: small high-level helpers used by the rest of the app
"""
