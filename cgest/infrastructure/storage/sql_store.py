"""
SQL-backed record store (SQLAlchemy)
"""
from dataclasses import fields
from typing import Callable, Generic, List, Optional, Type, TypeVar

from sqlalchemy.orm import Session

T = TypeVar("T")


class SqlRecordStore(Generic[T]):
    """
    Maps one domain dataclass to one ORM model with columns of the same names.

    Cada upsert/delete é um commit próprio: a escrita é por registro,
    nunca a coleção inteira.
    """

    def __init__(self, db: Session, model, record_cls: Type[T], account_id: int):
        self.db = db
        self.model = model
        self.record_cls = record_cls
        self.account_id = account_id
        self._field_names = [f.name for f in fields(record_cls)]

    def _rows(self):
        return self.db.query(self.model).filter(self.model.account_id == self.account_id)

    def _to_record(self, row) -> T:
        return self.record_cls(**{name: getattr(row, name) for name in self._field_names})

    def get(self, record_id: str) -> Optional[T]:
        row = self._rows().filter(self.model.id == record_id).first()
        return self._to_record(row) if row else None

    def list(self) -> List[T]:
        return [self._to_record(row) for row in self._rows().order_by(self.model.pk).all()]

    def query(self, predicate: Callable[[T], bool]) -> List[T]:
        return [record for record in self.list() if predicate(record)]

    def upsert(self, record: T) -> T:
        row = self._rows().filter(self.model.id == record.id).first()
        if row is None:
            row = self.model(account_id=self.account_id)
            self.db.add(row)
        for name in self._field_names:
            setattr(row, name, getattr(record, name))
        self.db.commit()
        return record

    def delete(self, record_id: str) -> bool:
        deleted = (
            self._rows()
            .filter(self.model.id == record_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted > 0
