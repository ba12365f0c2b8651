"""Installer exceptions"""


class InstallError(Exception):
    """Base exception for installation errors"""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class FetchError(InstallError):
    """Bootstrap package could not be retrieved"""

    pass
