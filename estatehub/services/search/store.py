"""
Хранилище объектов для поиска.
Сервис поиска работает с любым объектом, реализующим PropertyStore;
в приложении это SqlAlchemyPropertyStore поверх сессии запроса.
"""
import logging
from typing import Any, List, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from estatehub.exceptions import StoreError
from estatehub.models import Property
from estatehub.services.search.predicate import SearchPredicate, SortSpec

logger = logging.getLogger(__name__)


class PropertyStore(Protocol):
    """Интерфейс хранилища: подсчет и выборка по предикату"""

    def count(self, predicate: SearchPredicate) -> int:
        ...

    def find(
        self,
        predicate: SearchPredicate,
        sort: SortSpec,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[Any]:
        ...

    def find_markers(self, predicate: SearchPredicate, sort: SortSpec) -> List[Any]:
        ...


class SqlAlchemyPropertyStore:
    """Хранилище поверх SQLAlchemy-сессии. Только чтение"""

    def __init__(self, db: Session):
        self.db = db

    def _query(self, predicate: SearchPredicate):
        return self.db.query(Property).filter(*predicate.to_clauses())

    def count(self, predicate: SearchPredicate) -> int:
        try:
            return self._query(predicate).count()
        except SQLAlchemyError as e:
            logger.error(f"Property count failed: {e}")
            raise StoreError("Не удалось выполнить поиск объектов") from e

    def find(
        self,
        predicate: SearchPredicate,
        sort: SortSpec,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[Property]:
        try:
            query = self._query(predicate)\
                .options(joinedload(Property.agency), selectinload(Property.images))\
                .order_by(*sort.order_by())\
                .offset(offset)
            if limit is not None:
                query = query.limit(limit)
            return query.all()
        except SQLAlchemyError as e:
            logger.error(f"Property search failed: {e}")
            raise StoreError("Не удалось выполнить поиск объектов") from e

    def find_markers(self, predicate: SearchPredicate, sort: SortSpec) -> List[Any]:
        """Все совпадения без пагинации, только колонки маркера карты"""
        try:
            return self.db.query(
                Property.id, Property.latitude, Property.longitude,
                Property.price, Property.title, Property.status
            ).filter(*predicate.to_clauses())\
                .order_by(*sort.order_by())\
                .all()
        except SQLAlchemyError as e:
            logger.error(f"Property markers query failed: {e}")
            raise StoreError("Не удалось выполнить поиск объектов") from e
