"""Shell environment variables kept in insertion order."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional


@dataclass
class Variable:
    """One environment variable; a value of None means declared but unset."""

    name: str
    value: Optional[str] = None


def _is_name_start(char: str) -> bool:
    return char == "_" or ("a" <= char <= "z") or ("A" <= char <= "Z")


def _is_name_char(char: str) -> bool:
    return _is_name_start(char) or ("0" <= char <= "9")


def is_valid_name(name: str) -> bool:
    """Return True if *name* is a valid identifier for a variable."""
    if not name or not _is_name_start(name[0]):
        return False
    return all(_is_name_char(char) for char in name)


def split_assignment(text: str) -> tuple[str, str]:
    """Split ``NAME=VALUE`` at the first ``=``.

    Raises ValueError when the text holds no ``=``.
    """
    name, sep, value = text.partition("=")
    if not sep:
        raise ValueError(f"not an assignment: {text!r}")
    return name, value


class Environment:
    """An ordered collection of shell variables."""

    def __init__(self, variables: Optional[Iterable[Variable]] = None) -> None:
        self._variables: list[Variable] = list(variables or ())

    @classmethod
    def from_strings(cls, entries: Iterable[str]) -> "Environment":
        """Build an environment from ``NAME=VALUE`` strings.

        ``OLDPWD`` is kept as a name with no value.
        """
        variables = []
        for entry in entries:
            name, value = split_assignment(entry)
            variables.append(Variable(name, None if name == "OLDPWD" else value))
        return cls(variables)

    def _find(self, name: str) -> Optional[Variable]:
        return next((var for var in self._variables if var.name == name), None)

    def get(self, name: str) -> Optional[str]:
        """Return the value of *name*, or None if it is absent or unset."""
        variable = self._find(name)
        return variable.value if variable else None

    def replace(self, name: str, value: Optional[str]) -> bool:
        """Change the value of an existing variable; return whether it existed."""
        variable = self._find(name)
        if variable is None:
            return False
        variable.value = value
        return True

    def set(self, name: str, value: Optional[str]) -> None:
        """Replace the variable's value, appending it if it is new."""
        if not self.replace(name, value):
            self._variables.append(Variable(name, value))

    def remove(self, name: str) -> bool:
        """Delete *name*; return whether it was present."""
        variable = self._find(name)
        if variable is None:
            return False
        self._variables.remove(variable)
        return True

    def __contains__(self, name: object) -> bool:
        return any(var.name == name for var in self._variables)

    def __iter__(self) -> Iterator[Variable]:
        return iter(list(self._variables))

    def __len__(self) -> int:
        return len(self._variables)

    def as_entries(self) -> list[str]:
        """All variables as strings; unset ones appear as the bare name."""
        return [
            var.name if var.value is None else f"{var.name}={var.value}"
            for var in self._variables
        ]

    def as_exec(self) -> dict[str, str]:
        """The variables that have values, as a mapping for child processes."""
        return {
            var.name: var.value for var in self._variables if var.value is not None
        }