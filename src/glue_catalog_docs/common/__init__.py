"""
Shared models, connections and utilities.
"""
