"""Validation rules for reservation payloads.

``validate_reserva`` applies every rule independently and returns the full
list of violations, so a caller can report all problems of a request at once.
"""
import re
from collections import namedtuple
from datetime import date

TIPOS_HABITACION = ['individual', 'doble', 'triple', 'suite']
ESTADOS = ['pendiente', 'confirmada', 'cancelada', 'completada']
CAPACIDADES = {
    'individual': {'min': 1, 'max': 1},
    'doble': {'min': 1, 'max': 2},
    'triple': {'min': 1, 'max': 3},
    'suite': {'min': 1, 'max': 4},
}
MAX_HUESPEDES = 4
RESERVA_FIELDS = ('hotel', 'fecha_inicio', 'fecha_fin', 'tipo_habitacion', 'estado', 'num_huespedes')

_DATE_RE = re.compile(r'[0-9]{4}-[0-9]{2}-[0-9]{2}')

Violation = namedtuple('Violation', ['field', 'message'])

REQUIRED_MESSAGES = {
    'fecha_inicio': 'La fecha de inicio es obligatoria',
    'fecha_fin': 'La fecha de fin es obligatoria',
    'tipo_habitacion': 'El tipo de habitación es obligatorio',
    'num_huespedes': 'El número de huéspedes es obligatorio',
}


def parse_date(value):
    """Return the ``date`` for a strict ``YYYY-MM-DD`` string, or None."""
    if not isinstance(value, str) or not _DATE_RE.fullmatch(value):
        return None
    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        return None
    # 2025-02-30 must not slide into March
    if parsed.isoformat() != value:
        return None
    return parsed


def is_valid_date(value):
    return parse_date(value) is not None


def dates_in_order(fecha_inicio, fecha_fin):
    return parse_date(fecha_inicio) < parse_date(fecha_fin)


def is_not_past(fecha, today=None):
    today = today or date.today()
    return parse_date(fecha) >= today


def is_valid_room_type(tipo):
    return isinstance(tipo, str) and tipo in TIPOS_HABITACION


def is_valid_status(estado):
    return isinstance(estado, str) and estado in ESTADOS


def as_guest_count(value):
    """Integer value of a JSON guest count, or None if it is not integral."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def fits_capacity(tipo, num_huespedes):
    capacidad = CAPACIDADES.get(tipo)
    if not capacidad:
        return False
    return capacidad['min'] <= num_huespedes <= capacidad['max']


def _present(data, key):
    value = data.get(key)
    return value is not None and value != ''


def validate_reserva(data, is_creation=True, today=None):
    errors = []

    # En creacion todos los campos son obligatorios; en actualizacion solo
    # los que llegan, que no pueden venir vacios ni nulos
    def required(key):
        return is_creation or key in data

    if required('hotel'):
        hotel = data.get('hotel')
        if not isinstance(hotel, str) or not hotel.strip():
            errors.append(Violation('hotel', 'El campo hotel es obligatorio'))
    for key, message in REQUIRED_MESSAGES.items():
        if required(key) and not _present(data, key):
            errors.append(Violation(key, message))
    if not is_creation and 'estado' in data and not _present(data, 'estado'):
        errors.append(Violation('estado', f"El estado debe ser uno de: {', '.join(ESTADOS)}"))

    # Formato de fechas
    inicio_ok = fin_ok = False
    if _present(data, 'fecha_inicio'):
        inicio_ok = is_valid_date(data['fecha_inicio'])
        if not inicio_ok:
            errors.append(Violation('fecha_inicio', 'La fecha de inicio debe tener el formato YYYY-MM-DD'))
    if _present(data, 'fecha_fin'):
        fin_ok = is_valid_date(data['fecha_fin'])
        if not fin_ok:
            errors.append(Violation('fecha_fin', 'La fecha de fin debe tener el formato YYYY-MM-DD'))

    if inicio_ok and fin_ok and not dates_in_order(data['fecha_inicio'], data['fecha_fin']):
        errors.append(Violation('fecha_inicio', 'La fecha de inicio debe ser anterior a la fecha de fin'))

    if inicio_ok and not is_not_past(data['fecha_inicio'], today):
        errors.append(Violation('fecha_inicio', 'La fecha de inicio no puede ser en el pasado'))

    if _present(data, 'tipo_habitacion') and not is_valid_room_type(data['tipo_habitacion']):
        errors.append(Violation(
            'tipo_habitacion',
            f"El tipo de habitación debe ser uno de: {', '.join(TIPOS_HABITACION)}"))

    if _present(data, 'estado') and not is_valid_status(data['estado']):
        errors.append(Violation('estado', f"El estado debe ser uno de: {', '.join(ESTADOS)}"))

    num = None
    if _present(data, 'num_huespedes'):
        num = as_guest_count(data['num_huespedes'])
        if num is None or num < 1:
            errors.append(Violation('num_huespedes', 'El número de huéspedes debe ser un número entero mayor a 0'))
        elif num > MAX_HUESPEDES:
            errors.append(Violation('num_huespedes', f'El número máximo de huéspedes es {MAX_HUESPEDES}'))

    # Capacidad segun tipo de habitacion
    tipo = data.get('tipo_habitacion')
    if num is not None and is_valid_room_type(tipo) and not fits_capacity(tipo, num):
        capacidad = CAPACIDADES[tipo]
        errors.append(Violation(
            'num_huespedes',
            f"El número de huéspedes para habitación {tipo} debe estar entre "
            f"{capacidad['min']} y {capacidad['max']}"))

    return errors
