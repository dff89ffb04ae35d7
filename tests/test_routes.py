import pytest

from hotel_paraiso import create_app, db
from hotel_paraiso.config import SQLTestingConfig
from hotel_paraiso.exceptions import StoreError
from hotel_paraiso.store import MemoryStore


class BrokenStore(MemoryStore):
    def _load(self):
        raise StoreError('disco lleno', cause=OSError('disco lleno'))


def crear(client, data):
    response = client.post('/api/reservas', json=data)
    assert response.status_code == 201
    return response.get_json()


def test_create_reservation(client, reserva_valida):
    response = client.post('/api/reservas', json=reserva_valida)

    assert response.status_code == 201
    body = response.get_json()
    assert body == {**reserva_valida, 'id': 1, 'estado': 'pendiente'}


def test_create_reports_all_validation_errors(client, store):
    response = client.post('/api/reservas', json={
        'hotel': 'Hotel Paraíso',
        'tipo_habitacion': 'individual',
        'num_huespedes': 2,
        'fecha_inicio': '2020-01-01',
        'fecha_fin': '2020-01-05',
    })

    assert response.status_code == 400
    assert response.get_json() == {'error': (
        'La fecha de inicio no puede ser en el pasado. '
        'El número de huéspedes para habitación individual debe estar entre 1 y 1'
    )}
    assert store.find_all() == []


@pytest.mark.parametrize('body', ['no es json', '[1, 2]'])
def test_create_rejects_non_object_body(client, body):
    response = client.post('/api/reservas', data=body, content_type='application/json')
    assert response.status_code == 400
    assert response.get_json() == {'error': 'El cuerpo de la petición debe ser un objeto JSON'}


def test_list_and_filter(client, reserva_valida):
    crear(client, reserva_valida)
    crear(client, {**reserva_valida, 'tipo_habitacion': 'suite', 'num_huespedes': 3,
                   'fecha_inicio': '2099-10-01', 'fecha_fin': '2099-10-03'})

    assert len(client.get('/api/reservas').get_json()) == 2

    response = client.get('/api/reservas?fecha_inicio=2099-08-16&fecha_fin=2099-08-18')
    assert response.status_code == 200
    assert [r['id'] for r in response.get_json()] == [1]

    response = client.get('/api/reservas?num_huespedes=3&tipo_habitacion=suite')
    assert [r['id'] for r in response.get_json()] == [2]

    # Un solo extremo de fecha no filtra
    response = client.get('/api/reservas?fecha_inicio=2100-01-01')
    assert [r['id'] for r in response.get_json()] == [1, 2]


def test_list_is_idempotent(client, reserva_valida):
    crear(client, reserva_valida)
    url = '/api/reservas?hotel=Hotel%20Para%C3%ADso&estado=pendiente'
    assert client.get(url).get_json() == client.get(url).get_json()


def test_list_empty_store(client):
    response = client.get('/api/reservas')
    assert response.status_code == 200
    assert response.get_json() == []


@pytest.mark.parametrize('query,message', [
    ('tipo_habitacion=loft', 'Tipo de habitación inválido. Debe ser uno de: individual, doble, triple, suite'),
    ('estado=activa', 'Estado inválido. Debe ser uno de: pendiente, confirmada, cancelada, completada'),
    ('num_huespedes=9', 'El número de huéspedes debe ser un entero entre 1 y 4'),
    ('fecha_inicio=2099-08-20&fecha_fin=2099-08-10', 'La fecha de inicio debe ser anterior a la fecha de fin'),
])
def test_list_rejects_invalid_filters(client, query, message):
    response = client.get(f'/api/reservas?{query}')
    assert response.status_code == 400
    assert response.get_json() == {'error': message}


def test_get_by_id(client, reserva_valida):
    creada = crear(client, reserva_valida)

    response = client.get('/api/reservas/1')
    assert response.status_code == 200
    assert response.get_json() == creada


@pytest.mark.parametrize('raw_id', ['0', '-3', 'abc', '1.5'])
def test_get_rejects_bad_id(client, raw_id):
    response = client.get(f'/api/reservas/{raw_id}')
    assert response.status_code == 400
    assert response.get_json() == {'error': 'El ID debe ser un número entero positivo'}


def test_get_missing(client):
    response = client.get('/api/reservas/5')
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Reserva No Encontrada'}


def test_update_only_changes_supplied_fields(client, reserva_valida):
    creada = crear(client, reserva_valida)

    response = client.put('/api/reservas/1', json={'estado': 'confirmada'})
    assert response.status_code == 200
    assert response.get_json() == {**creada, 'estado': 'confirmada'}
    assert client.get('/api/reservas/1').get_json()['estado'] == 'confirmada'


def test_update_cannot_change_id(client, reserva_valida):
    crear(client, reserva_valida)
    response = client.put('/api/reservas/1', json={'id': 8, 'hotel': 'Hotel Costa'})
    assert response.get_json()['id'] == 1
    assert client.get('/api/reservas/8').status_code == 404


def test_update_validation_error_leaves_record_untouched(client, reserva_valida):
    creada = crear(client, reserva_valida)

    response = client.put('/api/reservas/1', json={'fecha_inicio': '2020-01-01', 'estado': 'perdida'})
    assert response.status_code == 400
    assert response.get_json() == {'error': (
        'La fecha de inicio no puede ser en el pasado. '
        'El estado debe ser uno de: pendiente, confirmada, cancelada, completada'
    )}
    assert client.get('/api/reservas/1').get_json() == creada


def test_update_missing(client):
    response = client.put('/api/reservas/3', json={'estado': 'cancelada'})
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Reserva No Encontrada'}


def test_delete(client, reserva_valida):
    crear(client, reserva_valida)

    response = client.delete('/api/reservas/1')
    assert response.status_code == 200
    assert response.get_json() == {'message': 'Reserva Eliminada Correctamente'}
    assert client.get('/api/reservas/1').status_code == 404


def test_delete_missing_leaves_store_unchanged(client, store, reserva_valida):
    crear(client, reserva_valida)
    antes = store.find_all()

    response = client.delete('/api/reservas/99')
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Reserva No Encontrada'}
    assert store.find_all() == antes


@pytest.mark.parametrize('method,url,message', [
    ('get', '/api/reservas', 'Error interno del servidor al obtener las reservas'),
    ('get', '/api/reservas/1', 'Error interno del servidor al obtener la reserva'),
    ('put', '/api/reservas/1', 'Error interno del servidor al actualizar la reserva'),
    ('delete', '/api/reservas/1', 'Error interno del servidor al eliminar la reserva'),
    ('post', '/api/reservas', 'Error interno del servidor al crear la reserva'),
])
def test_store_failures_answer_500(reserva_valida, method, url, message):
    client = create_app('hotel_paraiso.config.TestingConfig', store=BrokenStore()).test_client()
    kwargs = {'json': reserva_valida} if method in ('post', 'put') else {}

    response = getattr(client, method)(url, **kwargs)

    assert response.status_code == 500
    assert response.get_json() == {'error': message}


def test_unknown_route_and_method(client):
    assert client.get('/api/otra-cosa').get_json() == {'error': 'Recurso no encontrado'}
    response = client.patch('/api/reservas/1', json={})
    assert response.status_code == 405
    assert response.get_json() == {'error': 'Método no permitido'}


def test_api_docs_serves_swagger_ui(client):
    response = client.get('/api-docs')
    assert response.status_code == 200
    assert response.mimetype == 'text/html'
    html = response.get_data(as_text=True)
    assert 'SwaggerUIBundle' in html
    assert '/api-docs/openapi.json' in html


def test_openapi_document(client):
    response = client.get('/api-docs/openapi.json')
    assert response.status_code == 200
    doc = response.get_json()
    assert doc['openapi'] == '3.0.0'
    assert set(doc['paths']['/api/reservas/{id}']) == {'get', 'put', 'delete'}
    schema = doc['components']['schemas']['Reserva']['properties']
    assert schema['tipo_habitacion']['enum'] == ['individual', 'doble', 'triple', 'suite']


@pytest.fixture(params=['memory', 'sql'])
def backend_client(request):
    if request.param == 'memory':
        yield create_app('hotel_paraiso.config.TestingConfig', store=MemoryStore()).test_client()
        return
    app = create_app(SQLTestingConfig)
    yield app.test_client()
    with app.app_context():
        db.drop_all()


@pytest.mark.parametrize('patch,message', [
    ({'hotel': ''}, 'El campo hotel es obligatorio'),
    ({'hotel': 123}, 'El campo hotel es obligatorio'),
    ({'tipo_habitacion': None}, 'El tipo de habitación es obligatorio'),
    ({'num_huespedes': None}, 'El número de huéspedes es obligatorio'),
    ({'fecha_fin': ''}, 'La fecha de fin es obligatoria'),
    ({'estado': None}, 'El estado debe ser uno de: pendiente, confirmada, cancelada, completada'),
])
def test_update_rejects_blank_null_or_mistyped_fields(backend_client, reserva_valida, patch, message):
    creada = crear(backend_client, reserva_valida)

    response = backend_client.put('/api/reservas/1', json=patch)

    assert response.status_code == 400
    assert response.get_json() == {'error': message}
    assert backend_client.get('/api/reservas/1').get_json() == creada


@pytest.mark.parametrize('method', ['get', 'put', 'delete'])
def test_oversized_id_is_not_found(backend_client, reserva_valida, method):
    crear(backend_client, reserva_valida)
    kwargs = {'json': {'estado': 'confirmada'}} if method == 'put' else {}

    response = getattr(backend_client, method)('/api/reservas/99999999999999999999999', **kwargs)

    assert response.status_code == 404
    assert response.get_json() == {'error': 'Reserva No Encontrada'}
