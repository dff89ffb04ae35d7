import logging

from hotel_paraiso import create_app

logger = logging.getLogger(__name__)


def configure_logging(app):
    logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                        level=app.config['LOG_LEVEL'])


app = create_app()
configure_logging(app)


if __name__ == '__main__':
    port = app.config['PORT']
    logger.info("Servidor corriendo en http://localhost:%s", port)
    app.run(port=port)
