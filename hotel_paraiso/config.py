import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    # json | sql | memory
    RESERVAS_STORE = os.environ.get('RESERVAS_STORE', 'json')
    RESERVAS_FILE = os.environ.get('RESERVAS_FILE', os.path.join('data', 'reservas.json'))

    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///reservas.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    PORT = int(os.environ.get('PORT', '3000'))


class TestingConfig(Config):
    TESTING = True
    RESERVAS_STORE = 'memory'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'


class SQLTestingConfig(TestingConfig):
    RESERVAS_STORE = 'sql'
