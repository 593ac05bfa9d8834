"""
git-helper: run routine git workflows against a configured repository.
"""

__version__ = "0.1.0"
