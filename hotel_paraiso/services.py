from hotel_paraiso.exceptions import NotFoundError, ValidationError
from hotel_paraiso.filters import filter_reservas, parse_filter_args
from hotel_paraiso.validation import Violation, validate_reserva


def parse_positive_id(raw):
    try:
        reserva_id = int(str(raw).strip())
    except ValueError:
        reserva_id = 0
    if reserva_id <= 0:
        raise ValidationError([Violation('id', 'El ID debe ser un número entero positivo')])
    return reserva_id


class ReservaService:
    """Validation and store orchestration for the reservation endpoints.

    Raises ``ValidationError`` or ``NotFoundError``; ``StoreError`` from the
    store is left to propagate.
    """

    def __init__(self, store):
        self.store = store

    def create(self, data):
        errors = validate_reserva(data, is_creation=True)
        if errors:
            raise ValidationError(errors)
        return self.store.create(data)

    def list(self, args):
        criteria, error = parse_filter_args(args)
        if error:
            raise ValidationError([Violation('query', error)])
        return filter_reservas(self.store.find_all(), criteria)

    def get(self, raw_id):
        reserva = self.store.find_by_id(parse_positive_id(raw_id))
        if reserva is None:
            raise NotFoundError()
        return reserva

    def update(self, raw_id, patch):
        errors = validate_reserva(patch, is_creation=False)
        if errors:
            raise ValidationError(errors)
        reserva = self.store.update(raw_id, patch)
        if reserva is None:
            raise NotFoundError()
        return reserva

    def delete(self, raw_id):
        if not self.store.delete(raw_id):
            raise NotFoundError()
