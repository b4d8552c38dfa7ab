from dataclasses import dataclass


@dataclass(frozen=True)
class ConfigOption:
    id: int | str
    name: str
