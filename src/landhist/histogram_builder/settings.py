"""
Histogram settings persistence (platformdirs + JSON).

Persisted items (schema v1):
- nbars: number of histogram buckets
- chart_style: "single" | "both" | "difference"
- scale_min / scale_max: display range shared by all scenarios
- indicator_colorscales: indicator name -> Plotly colorscale name

Behavior:
- If the settings file is missing or unreadable -> defaults are used
- If schema_version mismatches:
  - default: reset to defaults
  - optional: keep loaded values but update the version
- Unknown keys are ignored with warnings, bad values fall back to defaults
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from platformdirs import user_config_dir

from landhist.histogram_builder.colorscales import Colormap, colormap_with_overrides
from landhist.histogram_builder.histogram_state import ChartStyle, ScaleRange, resolve_chart_style
from landhist.utils.logging import get_logger

logger = get_logger(__name__)

# Increment on breaking changes to the on-disk JSON schema.
SCHEMA_VERSION: int = 1

DEFAULT_NBARS = 20
DEFAULT_SCALE_MIN = 0.0
DEFAULT_SCALE_MAX = 1.0


@dataclass
class HistogramSettingsData:
    """JSON-serializable settings payload (primitives, lists, dicts only)."""

    schema_version: int = SCHEMA_VERSION
    nbars: int = DEFAULT_NBARS
    chart_style: str = ChartStyle.BOTH.value
    scale_min: float = DEFAULT_SCALE_MIN
    scale_max: float = DEFAULT_SCALE_MAX
    indicator_colorscales: Dict[str, str] = field(default_factory=dict)

    def to_json_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "nbars": self.nbars,
            "chart_style": self.chart_style,
            "scale_min": self.scale_min,
            "scale_max": self.scale_max,
            "indicator_colorscales": dict(self.indicator_colorscales),
        }

    @classmethod
    def from_json_dict(cls, d: Dict[str, Any]) -> "HistogramSettingsData":
        """
        Tolerant loader:
        - ignores unknown keys
        - falls back to defaults for missing or invalid values
        """
        try:
            schema_version = int(d.get("schema_version", -1))
        except (TypeError, ValueError):
            schema_version = -1

        nbars = DEFAULT_NBARS
        if "nbars" in d:
            try:
                nbars = int(d["nbars"])
            except (TypeError, ValueError):
                logger.warning(f"Invalid nbars {d['nbars']!r}, using {DEFAULT_NBARS}")
            if nbars < 1:
                logger.warning(f"nbars must be >= 1, got {nbars}, using {DEFAULT_NBARS}")
                nbars = DEFAULT_NBARS

        chart_style = ChartStyle.BOTH.value
        if "chart_style" in d:
            try:
                chart_style = resolve_chart_style(d["chart_style"]).value
            except ValueError as e:
                logger.warning(f"{e}, using {chart_style!r}")

        scale_min, scale_max = DEFAULT_SCALE_MIN, DEFAULT_SCALE_MAX
        try:
            scale = ScaleRange(
                min=float(d.get("scale_min", DEFAULT_SCALE_MIN)),
                max=float(d.get("scale_max", DEFAULT_SCALE_MAX)),
            )
            scale_min, scale_max = scale.min, scale.max
        except (TypeError, ValueError) as e:
            logger.warning(f"Invalid scale in settings ({e}), using [{DEFAULT_SCALE_MIN}, {DEFAULT_SCALE_MAX}]")

        indicator_colorscales: Dict[str, str] = {}
        raw_scales = d.get("indicator_colorscales", {})
        if isinstance(raw_scales, dict):
            indicator_colorscales = {str(k): str(v) for k, v in raw_scales.items()}
        else:
            logger.warning("indicator_colorscales is not a dict, using empty dict")

        known_keys = {"schema_version", "nbars", "chart_style", "scale_min", "scale_max", "indicator_colorscales"}
        for key in d.keys():
            if key not in known_keys:
                logger.warning(f"Unknown key '{key}' in histogram settings, ignoring")

        return cls(
            schema_version=schema_version,
            nbars=nbars,
            chart_style=chart_style,
            scale_min=scale_min,
            scale_max=scale_max,
            indicator_colorscales=indicator_colorscales,
        )


class HistogramSettings:
    """
    Manager for loading/saving HistogramSettingsData to disk.
    """

    def __init__(self, *, path: Path, data: Optional[HistogramSettingsData] = None):
        self.path = path
        self.data = data if data is not None else HistogramSettingsData()

    @staticmethod
    def default_settings_path(
        app_name: str = "landhist",
        filename: str = "histogram_settings.json",
        app_author: str | None = None,
    ) -> Path:
        """
        Determine OS-appropriate per-user settings path.

        macOS:   ~/Library/Application Support/landhist/histogram_settings.json
        Linux:   ~/.config/landhist/histogram_settings.json
        Windows: %APPDATA%\\landhist\\histogram_settings.json
        """
        return Path(user_config_dir(app_name, app_author)) / filename

    @classmethod
    def load(
        cls,
        *,
        settings_path: Optional[Path] = None,
        app_name: str = "landhist",
        filename: str = "histogram_settings.json",
        app_author: str | None = None,
        schema_version: int = SCHEMA_VERSION,
        reset_on_version_mismatch: bool = True,
        create_if_missing: bool = False,
    ) -> "HistogramSettings":
        """
        Load settings from disk.

        If the file doesn't exist or is unreadable -> defaults.
        If schema mismatch:
          - reset_on_version_mismatch=True -> defaults
          - else -> keep loaded values but overwrite schema_version

        If create_if_missing=True and the file is missing -> write defaults.
        """
        path = settings_path or cls.default_settings_path(
            app_name=app_name, filename=filename, app_author=app_author
        )
        default_data = HistogramSettingsData(schema_version=schema_version)

        try:
            parsed = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.debug(f"Histogram settings not found at {path}, using defaults")
            settings = cls(path=path, data=default_data)
            if create_if_missing:
                settings.save()
            return settings
        except json.JSONDecodeError as e:
            logger.warning(f"Histogram settings at {path} are not valid JSON: {e}, using defaults")
            return cls(path=path, data=default_data)
        except OSError as e:
            logger.warning(f"Error reading histogram settings from {path}: {e}, using defaults")
            return cls(path=path, data=default_data)

        if not isinstance(parsed, dict):
            logger.warning(f"Histogram settings at {path} do not contain a dict, using defaults")
            return cls(path=path, data=default_data)

        loaded = HistogramSettingsData.from_json_dict(parsed)
        if loaded.schema_version != schema_version:
            if reset_on_version_mismatch:
                logger.warning(
                    f"Histogram settings schema version mismatch: loaded={loaded.schema_version}, "
                    f"expected={schema_version}, resetting to defaults"
                )
                return cls(path=path, data=default_data)
            loaded.schema_version = schema_version
        return cls(path=path, data=loaded)

    def save(self) -> None:
        """Write settings to disk."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self.data.to_json_dict(), indent=2), encoding="utf-8")
            logger.info(f"Saved histogram settings to {self.path}")
        except OSError as e:
            logger.error(f"Error saving histogram settings to {self.path}: {e}")
            raise

    def get_scale(self) -> ScaleRange:
        return ScaleRange(min=self.data.scale_min, max=self.data.scale_max)

    def set_scale(self, scale: ScaleRange) -> None:
        self.data.scale_min = scale.min
        self.data.scale_max = scale.max

    def get_chart_style(self) -> ChartStyle:
        return resolve_chart_style(self.data.chart_style)

    def set_chart_style(self, style: str | ChartStyle) -> None:
        self.data.chart_style = resolve_chart_style(style).value

    def get_nbars(self) -> int:
        return self.data.nbars

    def set_nbars(self, nbars: int) -> None:
        if nbars < 1:
            raise ValueError(f"nbars must be >= 1, got {nbars}")
        self.data.nbars = int(nbars)

    def get_colormap(self) -> Colormap:
        """Default colormap with this file's per-indicator colorscale overrides."""
        return colormap_with_overrides(self.data.indicator_colorscales)
