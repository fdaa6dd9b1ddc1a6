"""
shellenv: idempotent environment-variable provisioning for shell profiles.
"""

__version__ = "0.1.0"
