"""CRUD 基类：为各实体提供通用的数据访问方法。

所有“当前状态”的查询都经过 ``query()``，由它统一附加 ``is_deleted = false``
条件；写入前先按实体种类做形状校验，再检查未删除记录之间的唯一性。
"""

from typing import Any, Dict, Generic, Iterable, List, Mapping, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.enums import EntityKind
from app.core.exceptions import NotFoundError, UniquenessConflictError
from app.core.logger import logger
from app.models.base import Base
from app.validation.common import ShapeModel, is_valid_reference
from app.validation.registry import validate

ModelType = TypeVar("ModelType", bound=Base)


def is_visible(entity: Any) -> bool:
    """未被软删除的记录才对外可见。"""
    return not getattr(entity, "is_deleted", False)


def _merge(current: Mapping[str, Any], changes: Mapping[str, Any]) -> Dict[str, Any]:
    # 嵌套对象按字段合并，列表与标量整体替换
    merged = dict(current)
    for key, value in changes.items():
        previous = merged.get(key)
        if isinstance(value, Mapping) and isinstance(previous, Mapping):
            merged[key] = {**previous, **value}
        else:
            merged[key] = value
    return merged


class CRUDBase(Generic[ModelType]):
    """封装常见的查询、创建与保存逻辑，减少重复代码。

    子类通过 ``to_payload`` / ``to_columns`` 描述实体在校验层（嵌套结构）
    与存储层（拍平的列）之间的映射，``unique_fields`` 声明需要唯一的列。
    """

    unique_fields: tuple[str, ...] = ()
    not_found_message = "记录不存在或已删除"

    def __init__(self, model: Type[ModelType], kind: EntityKind):
        self.model = model
        self.kind = kind

    # 统一构造带软删除过滤的查询
    def query(self, db: Session, *, include_deleted: bool = False):
        query = db.query(self.model)
        if not include_deleted:
            query = query.filter(self.model.is_deleted.is_(False))
        return query

    def get(self, db: Session, id: Any, *, include_deleted: bool = False) -> Optional[ModelType]:
        # 超出主键范围的标识不可能命中任何记录
        if not is_valid_reference(id):
            return None
        return self.query(db, include_deleted=include_deleted).filter(self.model.id == id).first()

    def get_visible_or_404(self, db: Session, id: Any, *, msg: Optional[str] = None) -> ModelType:
        db_obj = self.get(db, id)
        if db_obj is None:
            raise NotFoundError(msg or self.not_found_message)
        return db_obj

    def get_multi(
        self,
        db: Session,
        *,
        skip: int = 0,
        limit: int = 100,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> List[ModelType]:
        query = self._filtered(db, filters)
        return query.order_by(self.model.id.asc()).offset(skip).limit(limit).all()

    def count(self, db: Session, *, filters: Optional[Mapping[str, Any]] = None) -> int:
        return self._filtered(db, filters).count()

    def _filtered(self, db: Session, filters: Optional[Mapping[str, Any]]):
        query = self.query(db)
        for field, value in (filters or {}).items():
            if value is None:
                continue
            query = query.filter(getattr(self.model, field) == value)
        return query

    # ---- 校验层与存储层之间的映射 ----

    def to_payload(self, db_obj: ModelType) -> Dict[str, Any]:
        """把 ORM 实例还原为校验层使用的嵌套结构。"""
        return {
            column.key: getattr(db_obj, column.key)
            for column in self.model.__table__.columns
            if column.key not in ("id", "create_time", "update_time")
        }

    def to_columns(self, shape: ShapeModel) -> Dict[str, Any]:
        """把校验通过的模型拍平成列取值。"""
        return shape.model_dump()

    # ---- 写入 ----

    def create(self, db: Session, payload: Mapping[str, Any], *, auto_commit: bool = True) -> ModelType:
        shape = validate(self.kind, payload)
        columns = self.to_columns(shape)
        self._ensure_unique(db, columns)
        db_obj = self.model(**columns)
        db.add(db_obj)
        return self._flush(db, db_obj, auto_commit=auto_commit)

    def update(
        self,
        db: Session,
        db_obj: ModelType,
        changes: Mapping[str, Any],
        *,
        auto_commit: bool = True,
    ) -> ModelType:
        merged = _merge(self.to_payload(db_obj), changes)
        shape = validate(self.kind, merged)
        columns = self.to_columns(shape)
        self._ensure_unique(db, columns, exclude_id=db_obj.id)
        for key, value in columns.items():
            self._assign(db_obj, key, value)
        db.add(db_obj)
        return self._flush(db, db_obj, auto_commit=auto_commit)

    def save(self, db: Session, db_obj: ModelType, *, auto_commit: bool = True) -> ModelType:
        db.add(db_obj)
        return self._flush(db, db_obj, auto_commit=auto_commit)

    def soft_delete(self, db: Session, db_obj: ModelType, *, auto_commit: bool = True) -> ModelType:
        """仅标记 ``is_deleted``；已删除的记录不会再被恢复。"""
        if db_obj.is_deleted:
            return db_obj
        db_obj.is_deleted = True
        db.add(db_obj)
        self._flush(db, db_obj, auto_commit=auto_commit)
        logger.info("Soft deleted %s #%s", self.kind.value, db_obj.id)
        return db_obj

    def _assign(self, db_obj: ModelType, key: str, value: Any) -> None:
        if getattr(db_obj, key) != value:
            setattr(db_obj, key, value)

    def _ensure_unique(
        self,
        db: Session,
        columns: Mapping[str, Any],
        *,
        exclude_id: Optional[int] = None,
    ) -> None:
        if not self.unique_fields or columns.get("is_deleted"):
            return
        conflicts = []
        for field in self.unique_fields:
            value = columns.get(field)
            if value is None:
                continue
            query = self.query(db).filter(getattr(self.model, field) == value)
            if exclude_id is not None:
                query = query.filter(self.model.id != exclude_id)
            if query.first() is not None:
                conflicts.append(field)
        if conflicts:
            logger.warning("Uniqueness conflict on %s: %s", self.kind.value, ", ".join(conflicts))
            raise UniquenessConflictError(conflicts)

    def _conflicting_fields(self, exc: IntegrityError) -> Iterable[str]:
        message = str(getattr(exc, "orig", exc)).lower()
        matched = [field for field in self.unique_fields if field in message]
        return matched or list(self.unique_fields)

    def _flush(self, db: Session, db_obj: ModelType, *, auto_commit: bool) -> ModelType:
        try:
            if auto_commit:
                db.commit()
                db.refresh(db_obj)
            else:
                db.flush()
        except IntegrityError as exc:
            db.rollback()
            if not self.unique_fields:
                raise
            fields = list(self._conflicting_fields(exc))
            logger.warning("Storage rejected %s write: %s", self.kind.value, ", ".join(fields))
            raise UniquenessConflictError(fields) from exc
        return db_obj
