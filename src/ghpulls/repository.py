from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

from .errors import InvalidRepositoryError


@dataclass(frozen=True)
class Repository:
    owner: str
    name: str

    def __post_init__(self) -> None:
        if not self.owner or not self.name:
            raise InvalidRepositoryError(f"{self.full_name!r} is not a valid OWNER/REPO identifier.")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def path(self) -> str:
        return f"/repos/{quote(self.owner, safe='')}/{quote(self.name, safe='')}"

    @classmethod
    def parse(cls, value: RepositoryLike) -> Repository:
        """Accept ``"owner/name"``, an ``(owner, name)`` pair, or a Repository."""
        if isinstance(value, Repository):
            return value
        if isinstance(value, str):
            if value.count("/") != 1:
                raise InvalidRepositoryError(f"{value!r} is not a valid OWNER/REPO identifier.")
            owner, name = value.split("/", 1)
            return cls(owner, name)
        if isinstance(value, tuple) and len(value) == 2:
            owner, name = value
            if isinstance(owner, str) and isinstance(name, str):
                return cls(owner, name)
        raise InvalidRepositoryError(f"Cannot build a repository identifier from {value!r}.")

    def __str__(self) -> str:
        return self.full_name


RepositoryLike = Repository | str | tuple[str, str]
