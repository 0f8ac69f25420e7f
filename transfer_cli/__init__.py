"""
Command-line tools for the rollup transfer SDK.
"""
