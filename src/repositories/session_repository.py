from repositories.base import BaseRepository
from repositories.error_handling import handle_repository_errors


class SessionRepository(BaseRepository):
   """Repository for login sessions (table sessions)."""

   @handle_repository_errors("insert session")
   def insert_session(self, user_id: int, token: str) -> int:
      """Insert a session row. Returns the number of affected rows."""
      query = """
         INSERT INTO sessions (user_id, cookie)
         VALUES (%s, %s)
      """
      return self._write(query, (user_id, token))

   @handle_repository_errors("find user by session token")
   def find_user_by_token(self, token: str):
      """Return (id, username, realname) of the session's user, or None."""
      query = """
         SELECT u.id, u.username, u.realname
         FROM users u
         INNER JOIN sessions s ON s.user_id = u.id
         WHERE s.cookie = %s
         LIMIT 1
      """
      return self._fetch_one(query, (token,))
