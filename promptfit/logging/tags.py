# promptfit/logging/tags.py
"""
Subsystem tags prefixed to log messages.

Changing a tag here updates it project-wide.
"""

CHUNKING = "[CHUNKING]"
LIMITS = "[LIMITS]"
IMAGES = "[IMAGES]"
CONFIG = "[CONFIG]"
PIPELINE = "[PIPELINE]"
