"""
Invoice financial-summary engine and its collaborator seams.
"""

__version__ = "0.1.0"
