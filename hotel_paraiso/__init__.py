import logging

from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

db = SQLAlchemy()
migrate = Migrate()

STORE_EXTENSION = 'reservas_store'


def build_store(app):
    from hotel_paraiso.store import JsonFileStore, MemoryStore, SQLAlchemyStore

    backend = app.config['RESERVAS_STORE']
    if backend == 'json':
        return JsonFileStore(app.config['RESERVAS_FILE'])
    if backend == 'sql':
        return SQLAlchemyStore(db)
    if backend == 'memory':
        return MemoryStore()
    raise ValueError(f"RESERVAS_STORE desconocido: {backend}")


def create_app(config_object='hotel_paraiso.config.Config', store=None):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.json.ensure_ascii = False

    logging.getLogger('hotel_paraiso').setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    # Inicializar extensiones
    db.init_app(app)
    migrate.init_app(app, db)

    app.extensions[STORE_EXTENSION] = store if store is not None else build_store(app)

    # Importar y registrar las rutas
    with app.app_context():
        from hotel_paraiso import routes
        app.register_blueprint(routes.api)

        if app.config['RESERVAS_STORE'] == 'sql':
            db.create_all()  # Crear tablas si no existen

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Recurso no encontrado'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'error': 'Método no permitido'}), 405

    return app
