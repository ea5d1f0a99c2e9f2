import yaml
from dataclasses import fields
from typing import Any, Dict

from .models import (
    AudioConfig, DEFAULT_KEYMAP, DisplayConfig, ErrorPolicy, MachineConfig, SystemConfig,
)

class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        return self._parse_config(data or {})

    def load_from_string(self, text: str) -> SystemConfig:
        return self._parse_config(yaml.safe_load(text) or {})

    def _parse_config(self, data: Dict[str, Any]) -> SystemConfig:
        if not isinstance(data, dict):
            raise ValueError("Configuration root must be a mapping.")

        machine_data = dict(data.get("machine", {}))
        if "error_policy" in machine_data:
            machine_data["error_policy"] = ErrorPolicy(str(machine_data["error_policy"]).lower())
        machine = self._build(MachineConfig, machine_data, int_fields=(
            "display_width", "display_height", "clock_hz", "memory_size",
            "font_offset", "entry_offset", "stack_capacity",
        ))
        self._validate_machine(machine)

        display = self._build(DisplayConfig, data.get("display", {}), int_fields=(
            "scale_factor", "fg_color", "bg_color",
        ))
        audio = self._build(AudioConfig, data.get("audio", {}), int_fields=("tone_hz", "sample_rate"))

        # Keymap: 指定されたキーのみ既定値を上書きする
        keymap = dict(DEFAULT_KEYMAP)
        for key_name, value in data.get("keymap", {}).items():
            index = self._parse_int(value)
            if not 0 <= index <= 0xF:
                raise ValueError(f"Keypad index out of range for '{key_name}': {value}")
            keymap[str(key_name).upper()] = index

        return SystemConfig(machine=machine, display=display, audio=audio, keymap=keymap)

    def _build(self, cls, section: Dict[str, Any], int_fields=()):
        known = {f.name for f in fields(cls)}
        unknown = set(section) - known
        if unknown:
            raise ValueError(f"Unknown {cls.__name__} option(s): {', '.join(sorted(unknown))}")
        values = {}
        for name, value in section.items():
            values[name] = self._parse_int(value) if name in int_fields else value
        return cls(**values)

    def _validate_machine(self, machine: MachineConfig) -> None:
        if machine.display_width <= 0 or machine.display_height <= 0:
            raise ValueError("Display size must be positive.")
        if machine.clock_hz <= 0:
            raise ValueError("clock_hz must be positive.")
        if machine.stack_capacity <= 0:
            raise ValueError("stack_capacity must be positive.")
        if not 0 <= machine.entry_offset < machine.memory_size:
            raise ValueError(f"entry_offset {machine.entry_offset:#x} outside memory.")
        if not 0 <= machine.font_offset <= machine.memory_size - 80:
            raise ValueError(f"font_offset {machine.font_offset:#x} leaves no room for the font.")

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
