from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import CredentialsError


class Credentials(BaseModel):
    """Account identifier and bearer token for the v20 REST API."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, str_strip_whitespace=True)

    account_id: str = Field(alias="accountID", min_length=1)
    bearer_token: str = Field(alias="bearerToken", min_length=1, repr=False)

    @property
    def authorization(self) -> str:
        return f"Bearer {self.bearer_token}"

    @classmethod
    def from_json(cls, payload: str) -> "Credentials":
        return cls.model_validate_json(payload)

    @classmethod
    def from_file(cls, path: str | Path) -> "Credentials":
        try:
            with open(path, "r", encoding="utf-8") as fh:
                payload = fh.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise CredentialsError(f"could not read credentials file {path}: {exc}") from exc

        try:
            return cls.from_json(payload)
        except ValidationError as exc:
            raise CredentialsError(f"invalid credentials file {path}: {exc}") from exc
