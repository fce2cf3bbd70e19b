class ChurchManagerError(Exception):
    pass


class ValidationError(ChurchManagerError):
    def __init__(self, message, field=None):
        super().__init__(message)
        self.field = field


class NotFoundError(ChurchManagerError):
    pass


class StorageError(ChurchManagerError):
    pass
