"""
Error handling package for the Apliiq client.
Maps every failure onto the ApliiqError taxonomy.
"""

from apliiq.infrastructure.error.handler import ErrorDetails, ErrorMapper

__all__ = ["ErrorDetails", "ErrorMapper"]
