"""
latency_probe package.

Times a declarative list of HTTP requests, run once sequentially and once
concurrently, and reports the slow ones.
"""

__version__ = "0.1.0"
