"""User-configurable settings for the session engine."""

from typing import Dict, Optional, Sequence, Tuple, Union

import structlog
from pydantic import TypeAdapter

from ..domain.models import MODEL_CATALOG, ModelOption, Settings, Tone

logger = structlog.get_logger()

# Accepts real bools and the usual string forms ("true", "off", "0", ...)
_BOOL = TypeAdapter(bool)


class InvalidModelId(ValueError):
    """Raised when a model id is not part of the catalog."""

    def __init__(self, model_id: str):
        super().__init__(f"Unknown model id: {model_id!r}")
        self.model_id = model_id


class InvalidTone(ValueError):
    """Raised when a tone is not one of the enumerated values."""

    def __init__(self, tone: object):
        super().__init__(f"Unknown tone: {tone!r}")
        self.tone = tone


def parse_tone(value: Union[Tone, str]) -> Tone:
    """Resolve a tone from its enum member or string value."""
    if isinstance(value, Tone):
        return value
    try:
        return Tone(value)
    except ValueError:
        raise InvalidTone(value) from None


class SettingsStore:
    """Holds the current settings and validates every change.

    The stored value is a frozen ``Settings`` instance; each setter swaps it
    for an updated copy, so snapshots handed out by ``get()`` never change.
    """

    def __init__(self, catalog: Optional[Sequence[ModelOption]] = None) -> None:
        self._catalog: Tuple[ModelOption, ...] = tuple(catalog or MODEL_CATALOG)
        if not self._catalog:
            raise ValueError("Model catalog must contain at least one entry")
        self._by_id: Dict[str, ModelOption] = {option.id: option for option in self._catalog}
        self._settings = Settings(model=self._catalog[0].id)

    @property
    def catalog(self) -> Tuple[ModelOption, ...]:
        return self._catalog

    def model_option(self, model_id: str) -> ModelOption:
        """Look up a catalog entry by id."""
        option = self._by_id.get(model_id)
        if option is None:
            raise InvalidModelId(model_id)
        return option

    def get(self) -> Settings:
        return self._settings

    def set_model(self, model_id: str) -> ModelOption:
        """Select a model and return its catalog entry."""
        try:
            option = self.model_option(model_id)
        except InvalidModelId:
            logger.warning("invalid_model_id", model_id=model_id)
            raise
        self._update(model=option.id)
        return option

    def set_tone(self, tone: Union[Tone, str]) -> Tone:
        try:
            parsed = parse_tone(tone)
        except InvalidTone:
            logger.warning("invalid_tone", tone=str(tone))
            raise
        self._update(tone=parsed)
        return parsed

    def set_show_timestamps(self, value: bool) -> None:
        self._update(show_timestamps=_BOOL.validate_python(value))

    def set_simulate_delay(self, value: bool) -> None:
        self._update(simulate_delay=_BOOL.validate_python(value))

    def _update(self, **changes) -> None:
        self._settings = self._settings.model_copy(update=changes)
        logger.info("setting_changed", **{k: getattr(v, "value", v) for k, v in changes.items()})
