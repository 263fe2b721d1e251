from __future__ import annotations

from typing import Iterable


class PaletteError(Exception):
    """Base class for configuration and programming errors in the engine."""


class MissingRoleError(PaletteError):
    def __init__(self, ref_map_name: str, missing: Iterable[str]):
        self.ref_map_name = ref_map_name
        self.missing = tuple(missing)
        super().__init__(
            f"Reference map '{ref_map_name}' is missing roles: {', '.join(self.missing)}"
        )


class UnknownThemeError(PaletteError):
    def __init__(self, theme: str, known: Iterable[str]):
        self.theme = theme
        super().__init__(f"Unknown theme '{theme}' (known: {', '.join(sorted(known))})")


class InvalidStepTableError(PaletteError):
    pass
