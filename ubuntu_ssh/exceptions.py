"""
Exception hierarchy for ubuntu-ssh.

Configuration problems are raised before any resource is registered with the
Pulumi engine, so a failed validation never leaves half-built infrastructure.
"""

from typing import Optional


class UbuntuSshError(Exception):
    """Base exception for all ubuntu-ssh errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ConfigurationError(UbuntuSshError):
    """Raised when stack configuration is missing, contradictory or unparsable."""

    pass
