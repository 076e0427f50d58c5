"""
Shared models, errors, configuration and file helpers.
"""
