"""
Provides the `SpellingTable` class that classifies MINILANG lexemes into token kinds.

The table is built once from `DEFAULT_SPELLINGS` and may be extended with
user-defined aliases (for example a localized keyword set), either from a
dictionary or from a JSON file.

Classes:
    - SpellingTable: Maps literal spellings to `TokenKind` members.
    - MappingError: Raised when alias configuration is invalid or conflicting.

Usage:
    >>> table = SpellingTable.from_defaults()
    >>> table.configure({"mientras": "WHILE"})
    >>> table.lookup("mientras")
    <TokenKind.WHILE: 'WHILE'>
"""

import json
from typing import Any

from minilang.minilang_constants import DEFAULT_SPELLINGS, TokenKind


class MappingError(Exception):
    """Raised when a spelling alias configuration is invalid.

    Attributes:
        conflicts (list[str]): Human-readable descriptions of conflicting aliases.
    """

    def __init__(self, message: str, conflicts: list[str] | None = None):
        super().__init__(message)
        self.conflicts = conflicts or []


class SpellingTable:
    """Lookup table from literal spelling to token kind.

    Attributes:
        kind_map (dict[str, TokenKind]): Spelling → kind.
    """

    def __init__(self) -> None:
        self.kind_map: dict[str, TokenKind] = {}

    @classmethod
    def from_defaults(cls) -> "SpellingTable":
        """Builds a table holding the canonical spellings of every token kind."""
        instance = cls()
        for kind, spellings in DEFAULT_SPELLINGS.items():
            for spelling in spellings:
                instance.kind_map[spelling] = kind
        return instance

    def lookup(self, spelling: str) -> TokenKind | None:
        """Returns the kind bound to `spelling`, or None if it is not in the table."""
        return self.kind_map.get(spelling)

    def symbols(self) -> list[str]:
        """Returns the non-word spellings, longest first, for operator matching."""
        return sorted(
            (s for s in self.kind_map if not (s[0].isalpha() or s[0] == "_")),
            key=len,
            reverse=True,
        )

    def _extract_aliases(self, entry: Any) -> list[str]:
        """Flattens an alias entry (string, iterable or comma-separated string)."""
        if entry is None:
            return []
        if isinstance(entry, str):
            return [alias.strip() for alias in entry.split(",") if alias.strip()]
        if isinstance(entry, (list, tuple, set, frozenset)):
            aliases: list[str] = []
            for item in entry:
                aliases.extend(self._extract_aliases(item))
            return aliases
        return []

    def configure(self, cfg: dict[Any, Any]) -> None:
        """
        Applies alias-to-kind mappings.

        Keys are alias groups (a string, comma-separated string, or iterable of
        strings); values are `TokenKind` members or their names.

        Raises:
            MappingError: If a kind name is unknown, an alias could never be
                produced by the lexer, or an alias is already bound to a different
                kind.
        """
        if not isinstance(cfg, dict):
            raise MappingError("Alias configuration must be a dict")

        new_map: dict[str, TokenKind] = {}
        conflicts: list[str] = []

        for alias_group, raw_kind in cfg.items():
            kind = self._resolve_kind(raw_kind)
            for alias in self._extract_aliases(alias_group):
                self._check_alias(alias)
                existing = new_map.get(alias, self.kind_map.get(alias))
                if existing is not None and existing is not kind:
                    conflicts.append(
                        f"'{alias}' → conflict between {existing.name} and {kind.name}"
                    )
                else:
                    new_map[alias] = kind

        if conflicts:
            raise MappingError("Alias collision(s) detected", conflicts)

        self.kind_map.update(new_map)

    def load_from_json(self, path: str) -> None:
        """
        Loads aliases from a JSON object file and applies them via `configure`.

        Example:
            {"mientras, tantque": "WHILE", "leer": "READ"}

        Raises:
            MappingError: If the file cannot be read or the configuration is invalid.
        """
        try:
            with open(path, encoding="utf-8") as f:
                raw_cfg = json.load(f)
        except (OSError, ValueError) as e:
            raise MappingError(f"Failed to load spelling file: {e}") from e
        self.configure(raw_cfg)

    @staticmethod
    def _check_alias(alias: str) -> None:
        """
        Rejects aliases the lexer can never produce.

        An alias must be a word (a letter or underscore followed by letters,
        digits or underscores) or a run of symbol characters with no letters,
        digits, underscores or comment markers.
        """
        if any(ch.isspace() for ch in alias):
            raise MappingError(f"Alias may not contain whitespace: {alias!r}")
        word_chars = [ch.isalnum() or ch == "_" for ch in alias]
        if alias[0].isalpha() or alias[0] == "_":
            if all(word_chars):
                return
        elif not any(word_chars) and not alias.startswith("#"):
            return
        raise MappingError(f"Alias must be a word or a run of symbols: {alias!r}")

    @staticmethod
    def _resolve_kind(raw_kind: Any) -> TokenKind:
        if isinstance(raw_kind, TokenKind):
            return raw_kind
        try:
            return TokenKind[str(raw_kind)]
        except KeyError:
            raise MappingError(f"Unknown token kind name: {raw_kind}") from None
