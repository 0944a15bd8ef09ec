"""
rune-rotation: rotate a bot between repetitive in-game tasks.
"""

__version__ = "0.1.0"
