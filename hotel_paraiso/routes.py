import logging

from flask import Blueprint, current_app, jsonify, render_template_string, request, url_for

from hotel_paraiso import STORE_EXTENSION
from hotel_paraiso.docs import SWAGGER_UI_PAGE, SWAGGER_UI_VERSION, build_openapi
from hotel_paraiso.exceptions import NotFoundError, StoreError, ValidationError
from hotel_paraiso.services import ReservaService

api = Blueprint('api', __name__)
logger = logging.getLogger(__name__)


def get_service():
    return ReservaService(current_app.extensions[STORE_EXTENSION])


def error_response(message, status):
    return jsonify({'error': message}), status


def json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return data


### RUTAS PARA RESERVAS ###

@api.route('/api/reservas', methods=['POST'])
def crear_reserva():
    data = json_body()
    if data is None:
        return error_response('El cuerpo de la petición debe ser un objeto JSON', 400)

    try:
        nueva_reserva = get_service().create(data)
    except ValidationError as e:
        return error_response(e.message, 400)
    except StoreError:
        logger.exception('Error al crear reserva')
        return error_response('Error interno del servidor al crear la reserva', 500)

    return jsonify(nueva_reserva), 201


@api.route('/api/reservas', methods=['GET'])
def obtener_reservas():
    try:
        resultado = get_service().list(request.args)
    except ValidationError as e:
        return error_response(e.message, 400)
    except StoreError:
        logger.exception('Error al obtener reservas')
        return error_response('Error interno del servidor al obtener las reservas', 500)

    return jsonify(resultado), 200


@api.route('/api/reservas/<reserva_id>', methods=['GET'])
def obtener_reserva(reserva_id):
    try:
        reserva = get_service().get(reserva_id)
    except ValidationError as e:
        return error_response(e.message, 400)
    except NotFoundError as e:
        return error_response(e.message, 404)
    except StoreError:
        logger.exception('Error al obtener reserva por ID')
        return error_response('Error interno del servidor al obtener la reserva', 500)

    return jsonify(reserva), 200


@api.route('/api/reservas/<reserva_id>', methods=['PUT'])
def actualizar_reserva(reserva_id):
    data = json_body()
    if data is None:
        return error_response('El cuerpo de la petición debe ser un objeto JSON', 400)

    try:
        reserva = get_service().update(reserva_id, data)
    except ValidationError as e:
        return error_response(e.message, 400)
    except NotFoundError as e:
        return error_response(e.message, 404)
    except StoreError:
        logger.exception('Error al actualizar reserva')
        return error_response('Error interno del servidor al actualizar la reserva', 500)

    return jsonify(reserva), 200


@api.route('/api/reservas/<reserva_id>', methods=['DELETE'])
def eliminar_reserva(reserva_id):
    try:
        get_service().delete(reserva_id)
    except NotFoundError as e:
        return error_response(e.message, 404)
    except StoreError:
        logger.exception('Error al eliminar reserva')
        return error_response('Error interno del servidor al eliminar la reserva', 500)

    return jsonify({'message': 'Reserva Eliminada Correctamente'}), 200


### DOCUMENTACION ###

@api.route('/api-docs', methods=['GET'])
def api_docs():
    return render_template_string(
        SWAGGER_UI_PAGE,
        title='API de Reservas Hotel Paraíso',
        version=SWAGGER_UI_VERSION,
        spec_url=url_for('api.openapi_spec'),
    )


@api.route('/api-docs/openapi.json', methods=['GET'])
def openapi_spec():
    return jsonify(build_openapi()), 200
