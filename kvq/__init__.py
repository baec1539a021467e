"""
KVQ - key-value and queue store over HTTP.
"""

__version__ = "0.1.0"
