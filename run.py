import logging

from resenas_api import create_app
from resenas_api.config import DevConfig

app = create_app(DevConfig)
log = logging.getLogger("resenas_api")

ENDPOINTS = [
    ("GET", "/api/resenas", "Obtener todas las reseñas"),
    ("GET", "/api/resenas/:id", "Obtener una reseña por ID"),
    ("GET", "/api/resenas/buscar/query", "Buscar reseñas (params: autor, titulo, serie, valoracion)"),
    ("POST", "/api/resenas", "Crear una nueva reseña"),
    ("PUT", "/api/resenas/:id", "Actualizar una reseña"),
    ("DELETE", "/api/resenas/:id", "Eliminar una reseña"),
]


def log_banner(host: str, port: int) -> None:
    log.info("API de reseñas ejecutándose en http://%s:%s", host, port)
    log.info("Almacenamiento: %s", app.config["STORAGE_PATH"])
    log.info("Endpoints disponibles:")
    for method, path, purpose in ENDPOINTS:
        log.info("  %-6s %-28s - %s", method, path, purpose)


if __name__ == "__main__":
    host = app.config["HOST"]
    port = app.config["PORT"]
    log_banner(host, port)
    app.run(host=host, port=port, debug=app.config["DEBUG"])
