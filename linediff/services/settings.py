"""
Application settings management.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Callable, Optional

from linediff.core.models import DiffOptions


@dataclass
class ComparisonSettings:
    """Settings for line comparison."""
    ignore_whitespace: bool = False
    ignore_case: bool = False
    show_line_numbers: bool = True
    context_lines: int = 3


@dataclass
class ReportSettings:
    """Settings for report output."""
    context_only: bool = False
    output_encoding: str = "utf-8"


@dataclass
class ApplicationSettings:
    """Main application settings container."""
    comparison: ComparisonSettings = field(default_factory=ComparisonSettings)
    report: ReportSettings = field(default_factory=ReportSettings)

    def to_options(self) -> DiffOptions:
        """
        Build validated diff options from the comparison settings.

        Raises:
            InvalidOptions: if a stored value is out of range or mistyped
        """
        return DiffOptions.from_dict(asdict(self.comparison))


class SettingsManager:
    """Manager for loading/saving application settings."""

    def __init__(self, settings_path: Optional[Path] = None):
        self.settings_path = Path(settings_path) if settings_path else self._get_default_path()
        self._settings: Optional[ApplicationSettings] = None
        self._observers: list[Callable[[ApplicationSettings], None]] = []

    @staticmethod
    def _get_default_path() -> Path:
        """Get the default settings file path."""
        if os.name == 'nt':
            # Windows
            app_data = os.environ.get('APPDATA', os.path.expanduser('~'))
            return Path(app_data) / 'LineDiff' / 'settings.json'
        else:
            # Linux/Mac
            config_home = os.environ.get('XDG_CONFIG_HOME',
                                         os.path.expanduser('~/.config'))
            return Path(config_home) / 'linediff' / 'settings.json'

    @property
    def settings(self) -> ApplicationSettings:
        """Get current settings, loading from disk if needed."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    def load(self) -> ApplicationSettings:
        """Load settings from disk, falling back to defaults."""
        if not self.settings_path.exists():
            return ApplicationSettings()

        try:
            with open(self.settings_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logging.warning(
                f"SettingsManager - Could not read {self.settings_path}, using defaults: {e}"
            )
            return ApplicationSettings()

        if not isinstance(data, dict):
            logging.warning(
                f"SettingsManager - {self.settings_path} does not hold a JSON object, using defaults"
            )
            return ApplicationSettings()

        return self._from_dict(data)

    def save(self, settings: Optional[ApplicationSettings] = None) -> bool:
        """Save settings to disk."""
        settings = settings or self._settings
        if settings is None:
            return False

        try:
            self.settings_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.settings_path, 'w', encoding='utf-8') as f:
                json.dump(asdict(settings), f, indent=2)
        except OSError as e:
            logging.error(f"SettingsManager - Failed to save {self.settings_path}: {e}")
            return False

        self._settings = settings
        self._notify_observers()
        return True

    def reset(self) -> ApplicationSettings:
        """Reset to default settings."""
        self._settings = ApplicationSettings()
        self.save()
        return self._settings

    def add_observer(self, callback: Callable[[ApplicationSettings], None]) -> None:
        """Add a callback to be notified of settings changes."""
        self._observers.append(callback)

    def remove_observer(self, callback: Callable[[ApplicationSettings], None]) -> None:
        """Remove a settings change observer."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify_observers(self) -> None:
        for callback in self._observers:
            callback(self._settings)

    def _from_dict(self, data: dict[str, Any]) -> ApplicationSettings:
        """Convert dictionary back to settings objects."""
        defaults = ComparisonSettings()
        comparison_data = self._section(data, 'comparison')
        comparison = ComparisonSettings(
            ignore_whitespace=comparison_data.get('ignore_whitespace', defaults.ignore_whitespace),
            ignore_case=comparison_data.get('ignore_case', defaults.ignore_case),
            show_line_numbers=comparison_data.get('show_line_numbers', defaults.show_line_numbers),
            context_lines=comparison_data.get('context_lines', defaults.context_lines),
        )

        report_defaults = ReportSettings()
        report_data = self._section(data, 'report')
        report = ReportSettings(
            context_only=report_data.get('context_only', report_defaults.context_only),
            output_encoding=report_data.get('output_encoding', report_defaults.output_encoding),
        )

        return ApplicationSettings(comparison=comparison, report=report)

    def _section(self, data: dict[str, Any], name: str) -> dict[str, Any]:
        """Get a settings section, treating a non-object section as empty."""
        section = data.get(name, {})
        if not isinstance(section, dict):
            logging.warning(
                f"SettingsManager - Section '{name}' in {self.settings_path} "
                f"is not a JSON object, using defaults for it"
            )
            return {}
        return section
