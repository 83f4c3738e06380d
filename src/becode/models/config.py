"""Decoder and encoder options.

Options are immutable Pydantic models. Every public codec function accepts a
ready-made config, keyword overrides, or both:

```python
decode(data, DecoderConfig(allow_float_extension=True))
decode(data, allow_float_extension=True)
decode(data, permissive, allow_trailing_data=True)
```
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import ConfigError

C = TypeVar("C", bound="CodecConfig")


class CodecConfig(BaseModel):
    """Base class for codec option models."""

    model_config = ConfigDict(
        # Options are plain flags and counters; no str -> bool guessing
        strict=True,
        # Shared freely between threads and calls
        frozen=True,
        # Misspelled options should fail loudly
        extra="forbid",
    )

    allow_float_extension: bool = Field(
        default=False, description="Accept/emit the non-standard f<literal>e token"
    )

    @classmethod
    def resolve(cls: type[C], config: C | None = None, **overrides: Any) -> C:
        """Build the effective config from an optional base and keyword overrides.

        Args:
            config: Base configuration (defaults are used if None)
            **overrides: Option values replacing those of the base

        Returns:
            Validated configuration instance

        Raises:
            ConfigError: If an option is unknown or has an invalid value
        """
        if config is not None and not isinstance(config, cls):
            raise ConfigError(f"Expected {cls.__name__}, got {type(config).__name__}")
        if config is not None and not overrides:
            return config

        options = config.model_dump() if config is not None else {}
        options.update(overrides)
        try:
            return cls(**options)
        except ValidationError as e:
            raise ConfigError(f"Invalid {cls.__name__}: {e}") from e


class DecoderConfig(CodecConfig):
    """Options controlling decode().

    Attributes:
        allow_float_extension: Accept f<literal>e tokens (default False)
        allow_trailing_data: Ignore bytes after the top-level element (default False)
        max_nesting_depth: Deepest list/dictionary nesting accepted (default 512)
        reject_duplicate_keys: Fail on a repeated dictionary key instead of
            letting the later value win (default True)
    """

    allow_trailing_data: bool = False
    max_nesting_depth: int = Field(default=512, ge=1)
    reject_duplicate_keys: bool = True


class EncoderConfig(CodecConfig):
    """Options controlling serialize().

    Attributes:
        allow_float_extension: Emit Float values as f<literal>e (default False)
        canonical_key_order: Emit dictionary entries sorted by raw key bytes
            instead of insertion order (default True)
    """

    canonical_key_order: bool = True
