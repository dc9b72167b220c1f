"""
settings.py

Persistent settings management for glyph layout.

Handles cross-platform settings storage using TOML format with platformdirs
for proper user config directory detection.

Settings file location:
    - Windows: %APPDATA%/glyphlayout/settings.toml
    - macOS: ~/Library/Application Support/glyphlayout/settings.toml
    - Linux: ~/.config/glyphlayout/settings.toml

Default values are documented in comments throughout this file.
If settings.toml is corrupted, these defaults will be used.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

# TOML reading - use tomllib for Python 3.11+, tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

APP_NAME = "glyphlayout"

log = logging.getLogger(__name__)

# Global settings manager instance (singleton)
_settings_manager: Optional["SettingsManager"] = None


def get_settings() -> "SettingsManager":
    """Get the global settings manager instance.

    Returns:
        The singleton SettingsManager instance.
    """
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
    return _settings_manager


def set_settings(manager: Optional["SettingsManager"]) -> None:
    """Replace the global settings manager (``None`` forces a reload)."""
    global _settings_manager
    _settings_manager = manager


# =============================================================================
# Text Settings
# =============================================================================

@dataclass
class TextSettings:
    """Label font settings.

    Defaults:
        family: "" (application default font)
        operation_font_size: 10
        variable_font_size: 12
    """
    family: str = ""               # Default: "" (application font)
    operation_font_size: int = 10  # Default: 10 pixels
    variable_font_size: int = 12   # Default: 12 pixels


@dataclass
class PaddingSettings:
    """Padding added around rendered labels.

    Defaults:
        operation_label: 2
        constant_label: 2
        variable_name: 12
        label_height: 4
    """
    operation_label: float = 2.0   # Default: 2.0 pixels
    constant_label: float = 2.0    # Default: 2.0 pixels
    variable_name: float = 12.0    # Default: 12.0 pixels, room for the value readout
    label_height: float = 4.0      # Default: 4.0 pixels


@dataclass
class PortSettings:
    """Variable port placement.

    Defaults:
        inset: 2
    """
    inset: float = 2.0  # Default: 2.0 pixels in from the left edge


@dataclass
class SliderSettings:
    """Slider and value display settings.

    Defaults:
        mantissa_digits: 3
        initial_span_factor: 10
    """
    mantissa_digits: int = 3            # Default: 3 significant digits
    initial_span_factor: float = 10.0   # Default: bounds start at +/- 10x the value


@dataclass
class MeasurementSettings:
    """Off-screen measurement surface settings.

    Defaults:
        surface_size: 100
    """
    surface_size: int = 100  # Default: 100 pixels square


@dataclass
class IndicatorSettings:
    """Indicator triangle settings.

    Defaults:
        length: 10
        half_base: 3
        color: "#FF0000"
    """
    length: float = 10.0     # Default: 10.0 pixels
    half_base: float = 3.0   # Default: 3.0 pixels
    color: str = "#FF0000"   # Default: red


@dataclass
class LayoutSettings:
    """All glyph layout settings."""
    text: TextSettings = field(default_factory=TextSettings)
    padding: PaddingSettings = field(default_factory=PaddingSettings)
    ports: PortSettings = field(default_factory=PortSettings)
    slider: SliderSettings = field(default_factory=SliderSettings)
    measurement: MeasurementSettings = field(default_factory=MeasurementSettings)
    indicator: IndicatorSettings = field(default_factory=IndicatorSettings)


# =============================================================================
# Main App Settings
# =============================================================================

@dataclass
class AppSettings:
    """Application settings with default values.

    Attributes:
        layout: Glyph layout settings.
    """
    layout: LayoutSettings = field(default_factory=LayoutSettings)


# =============================================================================
# Settings Manager
# =============================================================================

class SettingsManager:
    """Manages loading, saving, and accessing application settings.

    Settings are stored in a TOML file at the platform-appropriate location.
    If the settings file doesn't exist, defaults are used and the file is
    created on first save.

    Args:
        app_name: Application name used for the config directory.
    """

    def __init__(self, app_name: str = APP_NAME):
        self.settings_dir = Path(platformdirs.user_config_dir(app_name))
        self.settings_file = self.settings_dir / "settings.toml"
        self.settings = self.load()

    def load(self) -> AppSettings:
        """Load settings from the TOML file.

        Returns:
            AppSettings instance with values from file or defaults if file
            doesn't exist or is invalid.
        """
        if not self.settings_file.exists():
            return AppSettings()

        try:
            with open(self.settings_file, "rb") as f:
                data = tomllib.load(f)

            return self._parse_toml(data)
        except Exception:
            # If file is corrupted or invalid, return defaults
            log.warning("Could not read %s, using default settings", self.settings_file)
            return AppSettings()

    def _parse_toml(self, data: Dict[str, Any]) -> AppSettings:
        """Parse TOML data into AppSettings.

        Args:
            data: Parsed TOML dictionary.

        Returns:
            AppSettings instance populated from TOML data.
        """
        settings = AppSettings()
        layout = data.get("layout", {})
        s = settings.layout

        if "text" in layout:
            t = layout["text"]
            s.text.family = t.get("family", s.text.family)
            s.text.operation_font_size = t.get("operation_font_size", s.text.operation_font_size)
            s.text.variable_font_size = t.get("variable_font_size", s.text.variable_font_size)
        if "padding" in layout:
            p = layout["padding"]
            s.padding.operation_label = p.get("operation_label", s.padding.operation_label)
            s.padding.constant_label = p.get("constant_label", s.padding.constant_label)
            s.padding.variable_name = p.get("variable_name", s.padding.variable_name)
            s.padding.label_height = p.get("label_height", s.padding.label_height)
        if "ports" in layout:
            s.ports.inset = layout["ports"].get("inset", s.ports.inset)
        if "slider" in layout:
            sl = layout["slider"]
            s.slider.mantissa_digits = sl.get("mantissa_digits", s.slider.mantissa_digits)
            s.slider.initial_span_factor = sl.get("initial_span_factor", s.slider.initial_span_factor)
        if "measurement" in layout:
            m = layout["measurement"]
            s.measurement.surface_size = m.get("surface_size", s.measurement.surface_size)
        if "indicator" in layout:
            i = layout["indicator"]
            s.indicator.length = i.get("length", s.indicator.length)
            s.indicator.half_base = i.get("half_base", s.indicator.half_base)
            s.indicator.color = i.get("color", s.indicator.color)

        return settings

    def save(self) -> None:
        """Save current settings to the TOML file.

        Creates the settings directory if it doesn't exist.
        """
        self.settings_dir.mkdir(parents=True, exist_ok=True)

        data = self._to_toml_dict()

        with open(self.settings_file, "wb") as f:
            tomli_w.dump(data, f)

    def _to_toml_dict(self) -> Dict[str, Any]:
        """Convert settings to a TOML-compatible dictionary structure.

        Returns:
            Dictionary organized by TOML sections.
        """
        s = self.settings.layout
        return {
            "layout": {
                "text": {
                    "family": s.text.family,
                    "operation_font_size": s.text.operation_font_size,
                    "variable_font_size": s.text.variable_font_size,
                },
                "padding": {
                    "operation_label": s.padding.operation_label,
                    "constant_label": s.padding.constant_label,
                    "variable_name": s.padding.variable_name,
                    "label_height": s.padding.label_height,
                },
                "ports": {
                    "inset": s.ports.inset,
                },
                "slider": {
                    "mantissa_digits": s.slider.mantissa_digits,
                    "initial_span_factor": s.slider.initial_span_factor,
                },
                "measurement": {
                    "surface_size": s.measurement.surface_size,
                },
                "indicator": {
                    "length": s.indicator.length,
                    "half_base": s.indicator.half_base,
                    "color": s.indicator.color,
                },
            },
        }

    def to_toml(self) -> str:
        """Convert current settings to a TOML-formatted string.

        Returns:
            TOML representation of the current settings.
        """
        return tomli_w.dumps(self._to_toml_dict())

    def get_settings_path(self) -> Path:
        """Get the path to the settings file.

        Returns:
            Path object pointing to the settings file location.
        """
        return self.settings_file


def get_layout_settings() -> LayoutSettings:
    """Shortcut for the current layout settings."""
    return get_settings().settings.layout
