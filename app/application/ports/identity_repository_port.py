from __future__ import annotations

from typing import Mapping, Protocol

from app.domain.entities.identity import IdentityRecord


class IdentityRepositoryPort(Protocol):
    def get(self, *, identity_id: str) -> IdentityRecord | None:
        ...

    def find_by_email(self, *, email: str) -> list[IdentityRecord]:
        ...

    def merge_update(
        self,
        *,
        identity_id: str,
        fields: Mapping[str, str],
        if_absent: str | None = None,
    ) -> IdentityRecord:
        """Merge ``fields`` into the stored metadata.

        When ``if_absent`` names a key that is already set on the record read for
        the write, nothing is written and ``AccountAlreadyExistsError`` is raised.
        """
        ...
