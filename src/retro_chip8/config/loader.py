import yaml
from typing import Dict, Any

from .models import SystemConfig, MemoryRegion, HostConfig, DEFAULT_KEY_BINDINGS

class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        return self._parse_config(data)

    def _parse_config(self, data: Dict[str, Any]) -> SystemConfig:
        # Parse Memory Map
        memory_map = []
        for region_data in data.get("memory_map", []):
            memory_map.append(MemoryRegion(
                start=self._parse_int(region_data.get("start")),
                end=self._parse_int(region_data.get("end")),
                type=str(region_data.get("type", "RAM")).upper(),
                label=region_data.get("label", "")
            ))

        # Parse Host Settings
        host_data = data.get("host", {}) or {}
        defaults = HostConfig()
        key_bindings = dict(DEFAULT_KEY_BINDINGS)
        if "key_bindings" in host_data:
            key_bindings = self._parse_key_bindings(host_data["key_bindings"])

        host = HostConfig(
            cycle_delay_ms=self._parse_int(host_data.get("cycle_delay_ms", defaults.cycle_delay_ms)),
            scale=self._parse_int(host_data.get("scale", defaults.scale)),
            strict=bool(host_data.get("strict", defaults.strict)),
            trace=bool(host_data.get("trace", defaults.trace)),
            key_bindings=key_bindings
        )
        if host.cycle_delay_ms < 0:
            raise ValueError(f"cycle_delay_ms must not be negative: {host.cycle_delay_ms}")
        if host.scale <= 0:
            raise ValueError(f"scale must be positive: {host.scale}")

        return SystemConfig(memory_map=memory_map, host=host)

    # @intent:responsibility キー名 → キーパッド番号 の対応表を解析します。キー名は大文字に正規化します。
    def _parse_key_bindings(self, data: Dict[Any, Any]) -> Dict[str, int]:
        bindings = {}
        for key_name, pad in (data or {}).items():
            pad_index = self._parse_int(pad)
            if not 0 <= pad_index <= 0xF:
                raise ValueError(f"Keypad index out of range for '{key_name}': {pad}")
            bindings[str(key_name).upper()] = pad_index
        return bindings

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
