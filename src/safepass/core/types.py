"""Type aliases used across SafePass."""

from __future__ import annotations

from typing import Literal

RawFieldMap = dict[str, str]
CanonicalField = Literal["title", "email", "username", "secret", "url", "notes"]
