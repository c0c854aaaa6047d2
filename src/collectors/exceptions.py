"""Custom exceptions for the network dashboard collaborators."""

class NetDashboardError(Exception):
    """Base exception for network dashboard operations."""
    pass

class CommandError(NetDashboardError):
    """An external command was missing, timed out or failed."""
    def __init__(self, message: str, command: list = None, returncode: int = None, stderr: str = None):
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr

class ConfigurationError(NetDashboardError):
    """Configuration is invalid."""
    pass
