# apps/compositions/config.py

"""
Composition configuration and request descriptors.

The foreground/background file locations, the chroma-key colour and every
pipeline constant are read from ``settings.COMPOSITION`` instead of being
embedded in the workflow, so they can be injected and tested.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

import environ
from django.conf import settings

from .exceptions import InvalidCompositionConfigError

HEX_COLOR_PATTERN = re.compile(r'^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')
NAMED_COLOR_PATTERN = re.compile(r'^[a-zA-Z]+$')

GRAVITIES = (
    'north', 'north_east', 'east', 'south_east', 'south',
    'south_west', 'west', 'north_west', 'center',
)


def is_valid_chroma_key_color(value: Any) -> bool:
    """Accept ``#RGB``/``#RRGGBB`` hex values and plain colour names."""
    if not isinstance(value, str):
        return False
    return bool(HEX_COLOR_PATTERN.match(value) or NAMED_COLOR_PATTERN.match(value))


@dataclass(frozen=True)
class CompositionRequest:
    """Input of a single overlay composition."""
    foreground_path: str
    chroma_key_color: str
    background_path: str


@dataclass(frozen=True)
class CompositionConfig:
    foreground_path: str
    background_path: str
    chroma_key_color: str = '#6adb47'
    target_width: int = 500
    overlay_scale: float = 0.6
    transparency_tolerance: int = 20
    gravity: str = 'north'
    output_duration: float = 15.0
    cleanup_failure_is_fatal: bool = True

    def __post_init__(self):
        if not self.foreground_path:
            raise InvalidCompositionConfigError(
                'foreground_path', self.foreground_path, "must not be empty"
            )
        if not self.background_path:
            raise InvalidCompositionConfigError(
                'background_path', self.background_path, "must not be empty"
            )
        if not is_valid_chroma_key_color(self.chroma_key_color):
            raise InvalidCompositionConfigError(
                'chroma_key_color', self.chroma_key_color,
                "must be a #RGB/#RRGGBB hex value or a colour name"
            )
        if self.target_width <= 0:
            raise InvalidCompositionConfigError(
                'target_width', self.target_width, "must be a positive number of pixels"
            )
        if not 0 < self.overlay_scale <= 1:
            raise InvalidCompositionConfigError(
                'overlay_scale', self.overlay_scale, "must be in the range (0, 1]"
            )
        if not 0 <= self.transparency_tolerance <= 100:
            raise InvalidCompositionConfigError(
                'transparency_tolerance', self.transparency_tolerance,
                "must be between 0 and 100"
            )
        if self.gravity not in GRAVITIES:
            raise InvalidCompositionConfigError(
                'gravity', self.gravity, f"must be one of: {', '.join(GRAVITIES)}"
            )
        if self.output_duration <= 0:
            raise InvalidCompositionConfigError(
                'output_duration', self.output_duration, "must be a positive number of seconds"
            )

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> 'CompositionConfig':
        """Build a config from a ``COMPOSITION``-style settings dictionary."""
        defaults = cls.__dataclass_fields__
        return cls(
            foreground_path=str(values.get('FOREGROUND_PATH', '')),
            background_path=str(values.get('BACKGROUND_PATH', '')),
            chroma_key_color=values.get('CHROMA_KEY_COLOR', defaults['chroma_key_color'].default),
            target_width=int(values.get('TARGET_WIDTH', defaults['target_width'].default)),
            overlay_scale=float(values.get('OVERLAY_SCALE', defaults['overlay_scale'].default)),
            transparency_tolerance=int(
                values.get('TRANSPARENCY_TOLERANCE', defaults['transparency_tolerance'].default)
            ),
            gravity=values.get('GRAVITY', defaults['gravity'].default),
            output_duration=float(
                values.get('OUTPUT_DURATION', defaults['output_duration'].default)
            ),
            cleanup_failure_is_fatal=environ.Env.parse_value(
                values.get('CLEANUP_FAILURE_IS_FATAL', defaults['cleanup_failure_is_fatal'].default),
                bool,
            ),
        )

    @classmethod
    def from_settings(cls) -> 'CompositionConfig':
        return cls.from_dict(getattr(settings, 'COMPOSITION', {}))

    def to_request(self, chroma_key_color: Optional[str] = None) -> CompositionRequest:
        return CompositionRequest(
            foreground_path=self.foreground_path,
            chroma_key_color=chroma_key_color or self.chroma_key_color,
            background_path=self.background_path,
        )
