import logging
from contextlib import AbstractContextManager

logger = logging.getLogger("uvicorn.error")


class UnitOfWork(AbstractContextManager):
   """Transaction scope for auth writes on one pooled connection.

   Opens a transaction unless the connection already has one, hands out a
   buffered cursor and on exit commits or rolls back. A transaction that was
   already open is left to its owner.
   """

   def __init__(self, connection):
      self.connection = connection
      self._cursor = None
      self._owns_transaction = False

   def __enter__(self):
      if not self.connection.in_transaction:
         self.connection.start_transaction()
         self._owns_transaction = True
      self._cursor = self.connection.cursor(buffered=True)
      return self

   @property
   def cursor(self):
      return self._cursor

   def commit(self):
      if self._owns_transaction:
         self.connection.commit()

   def rollback(self):
      if self._owns_transaction:
         self.connection.rollback()

   def __exit__(self, exc_type, exc, tb):
      try:
         if exc:
            logger.warning(f"Rolling back auth write after {exc_type.__name__}")
            self.rollback()
         else:
            self.commit()
      finally:
         if self._cursor:
            self._cursor.close()
         self._owns_transaction = False
