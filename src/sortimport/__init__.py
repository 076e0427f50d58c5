"""
sortimport: canonical grouping and ordering of Go import blocks.
"""

__version__ = "0.1.0"
