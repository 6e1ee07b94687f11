"""
Maven Overview: dependency overview graphs for Maven project reports.
"""

__version__ = "1.0.0"
