from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FormSessionKeys:
    """Namespaced session-state keys for a multi-step form."""

    form_id: str

    @property
    def prefix(self) -> str:
        return f"multistep:{self.form_id}:"

    def namespace(self, key: str) -> str:
        return f"{self.prefix}{key}"

    @property
    def form(self) -> str:
        return self.namespace("form")
