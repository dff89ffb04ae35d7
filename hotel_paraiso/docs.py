"""API documentation: Swagger UI at ``/api-docs`` over the OpenAPI document.

Enums and capacities come from the validation module so the published
contract cannot drift from the rules the API enforces.
"""
from hotel_paraiso.validation import CAPACIDADES, ESTADOS, MAX_HUESPEDES, TIPOS_HABITACION


def _error(description):
    return {
        'description': description,
        'content': {'application/json': {'schema': {'$ref': '#/components/schemas/Error'}}},
    }


def _reserva_response(description):
    return {
        'description': description,
        'content': {'application/json': {'schema': {'$ref': '#/components/schemas/Reserva'}}},
    }


ID_PARAM = {
    'name': 'id', 'in': 'path', 'required': True,
    'schema': {'type': 'integer', 'minimum': 1},
}


def _query(name, schema, description):
    return {'name': name, 'in': 'query', 'required': False, 'schema': schema, 'description': description}


def build_openapi():
    capacidades = ', '.join(f"{tipo} ({c['min']}-{c['max']})" for tipo, c in CAPACIDADES.items())
    campos = {
        'hotel': {'type': 'string', 'example': 'Hotel Paraíso'},
        'tipo_habitacion': {'type': 'string', 'enum': TIPOS_HABITACION, 'example': 'doble'},
        'num_huespedes': {'type': 'integer', 'minimum': 1, 'maximum': MAX_HUESPEDES, 'example': 2},
        'fecha_inicio': {'type': 'string', 'format': 'date', 'example': '2099-08-15'},
        'fecha_fin': {'type': 'string', 'format': 'date', 'example': '2099-08-20'},
        'estado': {'type': 'string', 'enum': ESTADOS, 'default': 'pendiente'},
    }
    return {
        'openapi': '3.0.0',
        'info': {
            'title': 'API de Reservas Hotel Paraíso',
            'version': '1.0.0',
            'description': f'Gestión de reservas de habitaciones. Capacidades: {capacidades}.',
        },
        'paths': {
            '/api/reservas': {
                'post': {
                    'summary': 'Crear nueva reserva',
                    'requestBody': {
                        'required': True,
                        'content': {'application/json': {'schema': {'$ref': '#/components/schemas/NuevaReserva'}}},
                    },
                    'responses': {
                        '201': _reserva_response('Reserva creada'),
                        '400': _error('Datos inválidos'),
                        '500': _error('Error interno del servidor'),
                    },
                },
                'get': {
                    'summary': 'Listar reservas con filtros',
                    'description': 'El filtro por rango de fechas solo se aplica si se envían '
                                   'fecha_inicio y fecha_fin a la vez.',
                    'parameters': [
                        _query('hotel', {'type': 'string'}, 'Nombre exacto del hotel'),
                        _query('fecha_inicio', {'type': 'string', 'format': 'date'}, 'Inicio del rango'),
                        _query('fecha_fin', {'type': 'string', 'format': 'date'}, 'Fin del rango'),
                        _query('tipo_habitacion', {'type': 'string', 'enum': TIPOS_HABITACION}, 'Tipo de habitación'),
                        _query('estado', {'type': 'string', 'enum': ESTADOS}, 'Estado de la reserva'),
                        _query('num_huespedes', {'type': 'integer', 'minimum': 1, 'maximum': MAX_HUESPEDES},
                               'Número de huéspedes'),
                    ],
                    'responses': {
                        '200': {
                            'description': 'Lista de reservas',
                            'content': {'application/json': {'schema': {
                                'type': 'array', 'items': {'$ref': '#/components/schemas/Reserva'}}}},
                        },
                        '400': _error('Filtro inválido'),
                        '500': _error('Error interno del servidor'),
                    },
                },
            },
            '/api/reservas/{id}': {
                'get': {
                    'summary': 'Obtener reserva por ID',
                    'parameters': [ID_PARAM],
                    'responses': {
                        '200': _reserva_response('Reserva encontrada'),
                        '400': _error('ID inválido'),
                        '404': _error('Reserva No Encontrada'),
                        '500': _error('Error interno del servidor'),
                    },
                },
                'put': {
                    'summary': 'Actualizar reserva',
                    'parameters': [ID_PARAM],
                    'requestBody': {
                        'required': True,
                        'content': {'application/json': {'schema': {'$ref': '#/components/schemas/CamposReserva'}}},
                    },
                    'responses': {
                        '200': _reserva_response('Reserva actualizada'),
                        '400': _error('Datos inválidos'),
                        '404': _error('Reserva No Encontrada'),
                        '500': _error('Error interno del servidor'),
                    },
                },
                'delete': {
                    'summary': 'Eliminar reserva',
                    'parameters': [ID_PARAM],
                    'responses': {
                        '200': {
                            'description': 'Reserva eliminada',
                            'content': {'application/json': {'schema': {
                                'type': 'object',
                                'properties': {'message': {'type': 'string',
                                                           'example': 'Reserva Eliminada Correctamente'}}}}},
                        },
                        '404': _error('Reserva No Encontrada'),
                        '500': _error('Error interno del servidor'),
                    },
                },
            },
        },
        'components': {
            'schemas': {
                'CamposReserva': {'type': 'object', 'properties': campos},
                'NuevaReserva': {
                    'type': 'object',
                    'properties': campos,
                    'required': ['hotel', 'tipo_habitacion', 'num_huespedes', 'fecha_inicio', 'fecha_fin'],
                },
                'Reserva': {
                    'type': 'object',
                    'properties': {'id': {'type': 'integer', 'example': 1}, **campos},
                },
                'Error': {'type': 'object', 'properties': {'error': {'type': 'string'}}},
            },
        },
    }


SWAGGER_UI_VERSION = '5'

SWAGGER_UI_PAGE = """<!DOCTYPE html>
<html lang="es">
<head>
  <meta charset="utf-8">
  <title>{{ title }}</title>
  <link rel="stylesheet" href="https://unpkg.com/swagger-ui-dist@{{ version }}/swagger-ui.css">
</head>
<body>
  <div id="swagger-ui"></div>
  <script src="https://unpkg.com/swagger-ui-dist@{{ version }}/swagger-ui-bundle.js"></script>
  <script>
    window.ui = SwaggerUIBundle({url: "{{ spec_url }}", dom_id: "#swagger-ui"});
  </script>
</body>
</html>
"""
