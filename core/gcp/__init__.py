"""
core/gcp - Google Cloud client layer

GCPReader implements the listing capability the discovery registry calls.
"""

from .reader import GCPReader, load_credentials

__all__ = ["GCPReader", "load_credentials"]
