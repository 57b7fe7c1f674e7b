"""Interactive English-Spanish word list."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import TextIO

SIZE_STRING = 100

MENU = "\t\t\tDiccionario\n0.- Salir\n1.- Agregar nueva palabra\n2.- Mostrar palabras\n"


@dataclass(frozen=True)
class Translation:
    """An English word and its Spanish translation."""

    english: str
    spanish: str

    def __post_init__(self) -> None:
        for word in (self.english, self.spanish):
            if len(word) >= SIZE_STRING:
                raise ValueError(f"word longer than {SIZE_STRING - 1} characters")

    def __str__(self) -> str:
        return f"{self.english}: {self.spanish}"


@dataclass
class Dictionary:
    """Translations in the order they were added."""

    entries: list[Translation] = field(default_factory=list)

    def add(self, english: str, spanish: str) -> Translation:
        translation = Translation(english, spanish)
        self.entries.append(translation)
        return translation

    def show(self, out: TextIO) -> None:
        for translation in self.entries:
            out.write(f"{translation}\n")

    def __iter__(self) -> Iterator[Translation]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def _tokens(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        yield from line.split()


def run(lines: Iterable[str], out: TextIO) -> Dictionary:
    """Drive the menu from whitespace-separated input until 0 or end of input."""
    dictionary = Dictionary()
    tokens = _tokens(lines)
    while True:
        out.write(MENU)
        token = next(tokens, None)
        if token is None:
            break
        try:
            option = int(token)
        except ValueError:
            continue
        if option == 0:
            break
        if option == 1:
            out.write("\t\t\tOpcion 1\n")
            out.write("Ingrese palabra en ingles: \n")
            english = next(tokens, None)
            if english is None:
                break
            out.write("Ingrese palabra en español: \n")
            spanish = next(tokens, None)
            if spanish is None:
                break
            dictionary.add(english, spanish)
        elif option == 2:
            out.write("\t\t\tOpcion 2\n")
            dictionary.show(out)
    return dictionary


def main(argv: list[str] | None = None) -> int:
    run(sys.stdin, sys.stdout)
    return 0