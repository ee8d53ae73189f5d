from typing import Any, Dict, Union

from sqlalchemy import MetaData
from sqlalchemy.orm import as_declarative, declared_attr

# Deterministic constraint names, so SQLite batch migrations can refer to them.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

class_registry: Dict = {}


@as_declarative(class_registry=class_registry, metadata=MetaData(naming_convention=NAMING_CONVENTION))
class Base:
    id: Any
    __name__: str

    # Tables are named after the lowercased class name unless a model says otherwise.
    __tablename__: Union[declared_attr[Any], str] = declared_attr(lambda cls: cls.__name__.lower())
