from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from ..errors import ReviewError
from ..extensions import get_store
from ..models import ReviewInput, ReviewPatch, SearchFilters

bp = Blueprint("resenas_api", __name__)


@bp.errorhandler(ReviewError)
def handle_review_error(err: ReviewError):
    if err.status_code >= 500:
        current_app.logger.error("Storage failure: %s", err.message)
    return jsonify({"error": err.message}), err.status_code


@bp.errorhandler(Exception)
def handle_unexpected_error(err: Exception):
    if isinstance(err, HTTPException):
        return err
    current_app.logger.exception("Unhandled error in reviews API")
    return jsonify({"error": "Error interno del servidor"}), 500


@bp.get("/resenas")
def api_resenas_list():
    try:
        reviews = get_store().load_all()
    except Exception:
        current_app.logger.exception("Failed to list reviews")
        return jsonify({"error": "Error al leer las reseñas"}), 500
    return jsonify([r.to_dict() for r in reviews])


@bp.get("/resenas/buscar/query")
def api_resenas_search():
    filters = SearchFilters.from_args(request.args)
    try:
        reviews = get_store().search(filters)
    except Exception:
        current_app.logger.exception("Review search failed")
        return jsonify({"error": "Error al buscar reseñas"}), 500
    return jsonify([r.to_dict() for r in reviews])


@bp.get("/resenas/<int:resena_id>")
def api_resenas_get(resena_id: int):
    review = get_store().get_by_id(resena_id)
    return jsonify(review.to_dict())


@bp.post("/resenas")
def api_resenas_create():
    data = ReviewInput.from_json(request.get_json(silent=True) or {})
    review = get_store().create(data)
    return jsonify(review.to_dict()), 201


@bp.put("/resenas/<int:resena_id>")
def api_resenas_update(resena_id: int):
    store = get_store()
    # Existence is checked before the body, so a bad body on a missing id is a 404
    store.get_by_id(resena_id)
    patch = ReviewPatch.from_json(request.get_json(silent=True) or {})
    review = store.update(resena_id, patch)
    return jsonify(review.to_dict())


@bp.delete("/resenas/<int:resena_id>")
def api_resenas_delete(resena_id: int):
    get_store().delete(resena_id)
    return jsonify({"message": "Reseña eliminada correctamente"})
