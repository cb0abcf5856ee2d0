from pathlib import Path
import json
import logging
import threading
from typing import Any, Dict, List, Optional, Union

from ..errors import ReviewNotFoundError, StorageError
from ..models import Review, ReviewInput, ReviewPatch, SearchFilters, record_id

logger = logging.getLogger(__name__)


class ReviewStore:
    """Reviews kept as one JSON array in a single file.

    Every call re-reads the file, so edits made to it between requests are
    picked up. Mutations hold ``_lock`` across load/modify/save and work on
    the raw stored objects: records the service cannot read are written
    back as they were.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.RLock()

    def _load_records(self) -> List[Any]:
        with self._lock:
            if not self.path.exists():
                logger.info("Storage file %s does not exist yet; starting empty", self.path)
                return []
            try:
                with self.path.open("r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, ValueError):
                logger.exception("Error reading reviews from %s", self.path)
                return []
            if not isinstance(data, list):
                logger.error("Storage file %s does not hold a JSON array", self.path)
                return []
            return data

    @staticmethod
    def _index_of(records: List[Any], review_id: int) -> Optional[int]:
        return next((i for i, item in enumerate(records) if record_id(item) == review_id), None)

    def load_all(self) -> List[Review]:
        """Return every readable review, or [] when the file is missing or unreadable."""
        reviews = []
        for item in self._load_records():
            try:
                reviews.append(Review.from_dict(item))
            except TypeError as e:
                logger.warning("Skipping unreadable review record in %s: %s", self.path, e)
        return reviews

    def save_all(self, records: List[Union[Review, Dict[str, Any]]]) -> bool:
        """Overwrite the file with ``records``. Returns False if the write failed."""
        data = [r.to_dict() if isinstance(r, Review) else r for r in records]
        with self._lock:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with self.path.open("w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
            except (OSError, TypeError, ValueError):
                logger.exception("Error writing reviews to %s", self.path)
                return False
            return True

    def get_by_id(self, review_id: int) -> Review:
        for review in self.load_all():
            if review.id == review_id:
                return review
        raise ReviewNotFoundError(review_id)

    def search(self, filters: SearchFilters) -> List[Review]:
        return [r for r in self.load_all() if filters.matches(r)]

    def create(self, data: ReviewInput) -> Review:
        with self._lock:
            records = self._load_records()
            ids = [rid for rid in map(record_id, records) if rid is not None]
            new_id = max(ids, default=0) + 1
            review = data.to_review(new_id)
            records.append(review.to_dict())
            if not self.save_all(records):
                raise StorageError("Error al guardar la reseña")
            logger.debug("Created review %s", new_id)
            return review

    def update(self, review_id: int, patch: ReviewPatch) -> Review:
        with self._lock:
            records = self._load_records()
            index = self._index_of(records, review_id)
            if index is None:
                raise ReviewNotFoundError(review_id)
            try:
                review = Review.from_dict(records[index])
            except TypeError:
                logger.warning("Review %s in %s is unreadable; not updating it", review_id, self.path)
                raise ReviewNotFoundError(review_id) from None
            patch.apply(review)
            records[index] = review.to_dict()
            if not self.save_all(records):
                raise StorageError("Error al actualizar la reseña")
            logger.debug("Updated review %s", review_id)
            return review

    def delete(self, review_id: int) -> Dict[str, Any]:
        with self._lock:
            records = self._load_records()
            index = self._index_of(records, review_id)
            if index is None:
                raise ReviewNotFoundError(review_id)
            removed = records.pop(index)
            if not self.save_all(records):
                raise StorageError("Error al eliminar la reseña")
            logger.debug("Deleted review %s", review_id)
            return removed
