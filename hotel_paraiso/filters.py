from hotel_paraiso.validation import (
    ESTADOS,
    MAX_HUESPEDES,
    TIPOS_HABITACION,
    dates_in_order,
    is_valid_date,
    is_valid_room_type,
    is_valid_status,
    parse_date,
)

FILTER_KEYS = ('hotel', 'fecha_inicio', 'fecha_fin', 'tipo_habitacion', 'estado', 'num_huespedes')


def _to_int(value):
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def parse_filter_args(args):
    """Validate query-string filters.

    Returns ``(criteria, None)`` on success or ``(None, message)`` with the
    first problem found. Empty values are treated as absent.
    """
    criteria = {key: args.get(key) for key in FILTER_KEYS if args.get(key)}

    if 'tipo_habitacion' in criteria and not is_valid_room_type(criteria['tipo_habitacion']):
        return None, f"Tipo de habitación inválido. Debe ser uno de: {', '.join(TIPOS_HABITACION)}"

    if 'estado' in criteria and not is_valid_status(criteria['estado']):
        return None, f"Estado inválido. Debe ser uno de: {', '.join(ESTADOS)}"

    if 'fecha_inicio' in criteria and not is_valid_date(criteria['fecha_inicio']):
        return None, 'La fecha de inicio debe tener el formato YYYY-MM-DD'

    if 'fecha_fin' in criteria and not is_valid_date(criteria['fecha_fin']):
        return None, 'La fecha de fin debe tener el formato YYYY-MM-DD'

    if 'fecha_inicio' in criteria and 'fecha_fin' in criteria:
        if not dates_in_order(criteria['fecha_inicio'], criteria['fecha_fin']):
            return None, 'La fecha de inicio debe ser anterior a la fecha de fin'

    if 'num_huespedes' in criteria:
        num = _to_int(criteria['num_huespedes'])
        if num is None or num < 1 or num > MAX_HUESPEDES:
            return None, f'El número de huéspedes debe ser un entero entre 1 y {MAX_HUESPEDES}'
        criteria['num_huespedes'] = num

    return criteria, None


def _overlaps(reserva, desde, hasta):
    inicio = parse_date(reserva.get('fecha_inicio'))
    fin = parse_date(reserva.get('fecha_fin'))
    if inicio is None or fin is None:
        return False
    return inicio <= hasta and fin >= desde


def filter_reservas(reservas, criteria):
    resultado = list(reservas)

    if criteria.get('hotel'):
        resultado = [r for r in resultado if r.get('hotel') == criteria['hotel']]
    if criteria.get('tipo_habitacion'):
        resultado = [r for r in resultado if r.get('tipo_habitacion') == criteria['tipo_habitacion']]
    if criteria.get('estado'):
        resultado = [r for r in resultado if r.get('estado') == criteria['estado']]
    if criteria.get('num_huespedes') is not None:
        num = _to_int(criteria['num_huespedes'])
        resultado = [r for r in resultado if num is not None and _to_int(r.get('num_huespedes')) == num]

    # Solo se filtra por fechas si llegan ambos extremos
    if criteria.get('fecha_inicio') and criteria.get('fecha_fin'):
        desde = parse_date(criteria['fecha_inicio'])
        hasta = parse_date(criteria['fecha_fin'])
        if desde is not None and hasta is not None:
            resultado = [r for r in resultado if _overlaps(r, desde, hasta)]

    return resultado
