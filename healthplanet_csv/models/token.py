from __future__ import annotations

from pydantic import BaseModel, Field

ONE_WEEK_SECONDS = 60 * 60 * 24 * 7


class Credential(BaseModel):
    """OAuth2 token pair issued by Health Planet plus its issuance time."""

    access_token: str = Field(..., description="Bearer token for API calls")
    refresh_token: str = Field(..., description="Token used to mint a new access token")
    expires_in: int = Field(..., description="Lifetime of the access token in seconds")
    create_date: int = Field(
        0, description="Unix time when the token was issued or last refreshed"
    )

    def expires_at(self) -> int:
        return self.create_date + self.expires_in

    def is_expired(self, now: float) -> bool:
        return self.expires_at() < now

    def needs_refresh(self, now: float, grace_seconds: int = ONE_WEEK_SECONDS) -> bool:
        """Return ``True`` once ``now`` is inside the grace window before expiry."""

        return self.expires_at() - grace_seconds < now

    def to_json(self) -> str:
        """Serialize to the token file format, omitting an unset ``create_date``."""

        exclude = {"create_date"} if self.create_date == 0 else None
        return self.model_dump_json(indent=2, exclude=exclude)

    class Config:
        json_schema_extra = {
            "example": {
                "access_token": "1700000000000/abcdef",
                "refresh_token": "1700000000000/ghijkl",
                "expires_in": 2592000,
                "create_date": 1714521600,
            }
        }
