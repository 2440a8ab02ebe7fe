"""
buildpath

Finds the deepest chains of project references in a multi-project build.
"""

__version__ = "0.1.0"
