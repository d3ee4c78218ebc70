__all__ = [
    'DailyDriveError',
    'ConfigError',
    'AuthError',
    'SetupError',
    'EmptyPoolError',
    'SyncError',
]


class DailyDriveError(Exception):
    """ Base class for failures that end the run """


class ConfigError(DailyDriveError):
    pass


class AuthError(DailyDriveError):
    pass


class SetupError(DailyDriveError):
    pass


class EmptyPoolError(DailyDriveError):
    pass


class SyncError(DailyDriveError):
    pass
