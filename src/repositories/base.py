class BaseRepository:
   """Shared cursor plumbing for the auth repositories.

   Accepts a UnitOfWork (writes, committed by the unit of work) or a plain
   cursor opened by the caller (single-statement reads).
   """

   def __init__(self, uow_or_cursor):
      # a UnitOfWork exposes .cursor as a property, a cursor has no such attribute
      if hasattr(uow_or_cursor, "cursor") and not callable(uow_or_cursor.cursor):
         self.uow = uow_or_cursor
         self.cursor = uow_or_cursor.cursor
      else:
         self.uow = None
         self.cursor = uow_or_cursor

   def _fetch_one(self, query, params):
      self.cursor.execute(query, params)
      return self.cursor.fetchone()

   def _write(self, query, params) -> int:
      """Execute a write statement and return the affected row count."""
      self.cursor.execute(query, params)
      return self.cursor.rowcount
