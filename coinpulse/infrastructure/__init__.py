"""
Infrastructure layer package.

Adapters that connect domain ports to the outside world.
"""
