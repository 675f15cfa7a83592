from .errors import translate_persistence_errors
from .unit_of_work import SqlAlchemyUnitOfWork

__all__ = ["SqlAlchemyUnitOfWork", "translate_persistence_errors"]
