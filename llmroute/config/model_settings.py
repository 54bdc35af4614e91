"""Default-model holder.

``ModelSettings`` is the one place the default model lives. A
:class:`~llmroute.openrouter.CompletionClient` keeps a reference to the
instance it was built with, so a later :meth:`ModelSettings.set_default_model`
changes the model used by every subsequent call that omits one.

The object is not synchronized; hosts that mutate it from several threads
coordinate that themselves.
"""

from __future__ import annotations

from typing import Optional

from ..base.errors import CallerError
from .defaults import DEFAULT_MODEL


class ModelSettings:
    """Mutable default model shared by reference."""

    def __init__(self, default_model: str = DEFAULT_MODEL) -> None:
        self._default_model = self._validated(default_model)

    @staticmethod
    def _validated(model: Optional[str]) -> str:
        value = (model or "").strip()
        if not value:
            raise CallerError("default model must be a non-empty model identifier")
        return value

    def get_default_model(self) -> str:
        return self._default_model

    def set_default_model(self, model: str) -> None:
        """Replace the default model; an empty value raises ``CallerError``."""
        self._default_model = self._validated(model)

    def resolve(self, model: Optional[str] = None) -> str:
        """Return ``model`` when given (and non-blank), else the current default."""
        if model is not None and model.strip():
            return model.strip()
        return self._default_model

    def __repr__(self) -> str:
        return f"ModelSettings(default_model={self._default_model!r})"


__all__ = ["ModelSettings"]
