"""Typed user-preference payload as delivered by the preferences backend."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..services.override_policy import normalize_module_overrides


class UserPreferences(BaseModel):
    """Validated preference record; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    user_id: int = Field(default=0, alias="userId")
    currency: str = "USD"
    language: str = "en-US"
    theme: str = "light"
    timezone: str = "UTC"
    date_format: str = Field(default="YYYY-MM-DD", alias="dateFormat")
    module_overrides: Optional[Dict[str, bool]] = Field(
        default=None, alias="moduleOverrides"
    )

    @field_validator("module_overrides", mode="before")
    @classmethod
    def normalize_overrides(cls, value: Any) -> Optional[Dict[str, bool]]:
        return normalize_module_overrides(value)

    @field_validator("theme", mode="before")
    @classmethod
    def normalize_theme(cls, value: Any) -> str:
        return "dark" if str(value or "").strip().lower() == "dark" else "light"

    @classmethod
    def from_payload(cls, payload: Any) -> "UserPreferences":
        """Parse a backend payload leniently; non-dict payloads yield defaults."""
        data = payload if isinstance(payload, dict) else {}
        return cls.model_validate(data)

    def with_override(self, module_id: str, enabled: bool) -> "UserPreferences":
        """Copy with one module decision set; the original is left untouched."""
        overrides = dict(self.module_overrides or {})
        overrides[module_id] = enabled
        return self.model_copy(update={"module_overrides": overrides})

    def without_override(self, module_id: str) -> "UserPreferences":
        overrides = dict(self.module_overrides or {})
        overrides.pop(module_id, None)
        return self.model_copy(update={"module_overrides": overrides or None})

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
