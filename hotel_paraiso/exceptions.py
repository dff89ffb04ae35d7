class ReservaError(Exception):
    """Base de los errores de la API de reservas."""
    pass


class ValidationError(ReservaError):
    """One or more validation rules were violated (HTTP 400)."""

    def __init__(self, violations):
        self.violations = list(violations)
        super().__init__(self.message)

    @property
    def messages(self):
        return [v.message for v in self.violations]

    @property
    def message(self):
        return '. '.join(self.messages)


class NotFoundError(ReservaError):
    """No reservation matches the given id (HTTP 404)."""

    def __init__(self, message='Reserva No Encontrada'):
        self.message = message
        super().__init__(message)


class StoreError(ReservaError):
    """The underlying store could not be read or written (HTTP 500)."""

    def __init__(self, message, cause=None):
        self.message = message
        self.cause = cause
        super().__init__(message)
