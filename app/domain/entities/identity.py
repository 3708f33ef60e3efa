from __future__ import annotations

from dataclasses import dataclass, field


METADATA_PREFIX = "arketype_"
PASSWORD_HASH_KEY = f"{METADATA_PREFIX}password_hash"
USER_ID_KEY = f"{METADATA_PREFIX}user_id"
SUBSCRIPTION_ID_KEY = f"{METADATA_PREFIX}subscription_id"


@dataclass(frozen=True)
class IdentityRecord:
    id: str
    email: str | None
    metadata: dict[str, str] = field(default_factory=dict)

    @property
    def password_hash(self) -> str | None:
        return self.metadata.get(PASSWORD_HASH_KEY) or None

    @property
    def user_id(self) -> str | None:
        return self.metadata.get(USER_ID_KEY) or None

    @property
    def subscription_id(self) -> str | None:
        return self.metadata.get(SUBSCRIPTION_ID_KEY) or None

    @property
    def is_provisioned(self) -> bool:
        return self.password_hash is not None
