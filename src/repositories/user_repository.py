from repositories.base import BaseRepository
from repositories.error_handling import handle_repository_errors


class UserRepository(BaseRepository):
   """Read access to the users table."""

   @handle_repository_errors("find user credentials")
   def find_credentials(self, username: str):
      """Return (id, username, realname, password_hash) for a username, or None."""
      query = """
         SELECT id, username, realname, password_hash
         FROM users
         WHERE username = %s
         LIMIT 1
      """
      return self._fetch_one(query, (username,))

   @handle_repository_errors("insert user")
   def insert_user(self, username: str, realname: str, password_hash: str) -> int:
      """Insert a user row. Returns the new user id."""
      query = """
         INSERT INTO users (username, realname, password_hash)
         VALUES (%s, %s, %s)
      """
      self._write(query, (username, realname, password_hash))
      return self.cursor.lastrowid
