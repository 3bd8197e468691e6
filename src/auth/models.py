from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    id: int
    username: str
    realname: str

    @classmethod
    def from_row(cls, row) -> "User":
        """Build a User from an (id, username, realname) row."""
        return cls(id=int(row[0]), username=row[1], realname=row[2] or "")
