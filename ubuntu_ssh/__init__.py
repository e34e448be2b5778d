"""
Pulumi building blocks for a single SSH-reachable Ubuntu EC2 host.
"""

from .exceptions import UbuntuSshError, ConfigurationError

__all__ = [
    'UbuntuSshError',
    'ConfigurationError',
]
