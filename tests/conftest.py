import pytest

from hotel_paraiso import create_app
from hotel_paraiso.store import MemoryStore


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def app(store):
    return create_app('hotel_paraiso.config.TestingConfig', store=store)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def reserva_valida():
    return {
        'hotel': 'Hotel Paraíso',
        'tipo_habitacion': 'doble',
        'num_huespedes': 2,
        'fecha_inicio': '2099-08-15',
        'fecha_fin': '2099-08-20',
    }
