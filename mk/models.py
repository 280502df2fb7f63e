"""Pydantic models for mk."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

Command = Literal[
    'open',
    'refresh',
    'pref',
    'dingus',
    'paste',
    'preview',
    'extract',
    'stylestealer',
    'importurl',
    'addstyle',
    'defaults',
    'do',
    'stream',
]


class Intent(BaseModel):
    """Everything the user asked for on the command line."""

    model_config = ConfigDict(frozen=True)

    file_path: str | None = None
    use_stdin: bool = False
    stream: bool = False
    refresh_target: str | None = None  # '' = frontmost window
    pref_page: str | None = None  # '' = default page
    dingus: bool = False
    paste: bool = False
    raise_window: bool = False
    show_help: bool = False
    show_version: bool = False
    verbose: bool = False
    preview_text: str | None = None
    extract_url: str | None = None
    stylestealer_url: str | None = None  # '' = no target URL
    importurl_url: str | None = None  # '' = no target URL
    style_name: str | None = None
    add_style_file: str | None = None
    defaults: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    js_script: str | None = None
    js_target: str | None = None
    warnings: tuple[str, ...] = ()

    @field_validator('defaults')
    @classmethod
    def freeze_defaults(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        """Wrap the preference pairs in a read-only view."""
        return MappingProxyType(dict(v))

    @field_serializer('defaults')
    def serialize_defaults(self, v: Mapping[str, str]) -> dict[str, str]:
        return dict(v)


class Request(BaseModel):
    """A single command destined for Marked."""

    model_config = ConfigDict(frozen=True)

    command: Command
    params: dict[str, str] = Field(default_factory=dict)

    @field_validator('params')
    @classmethod
    def validate_params(cls, v: dict[str, str]) -> dict[str, str]:
        """Validate that no parameter key is empty."""
        if any(not key for key in v):
            msg = 'Request parameter keys cannot be empty'
            raise ValueError(msg)
        return v
