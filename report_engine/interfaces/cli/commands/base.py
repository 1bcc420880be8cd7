"""
Shared behaviour for CLI sub-commands.
"""

import argparse
import json
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Optional

from report_engine.core.exceptions import BadRequestError, ValidationException

_STYLES = {
    "success": ("92", "✓"),
    "error": ("91", "✗"),
    "warning": ("93", "⚠"),
    "info": ("94", "ℹ"),
}


class BaseCommand(ABC):
    """
    A sub-command: declares its options in ``add_arguments`` and does its
    work in ``handle``, which receives the parsed options as keyword arguments.
    """

    description = ""

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog=self.__class__.__module__.rsplit(".", 1)[-1],
            description=self.description,
            add_help=False,
        )
        self.add_arguments(self.parser)

    def add_arguments(self, parser: argparse.ArgumentParser):
        pass

    @abstractmethod
    def handle(self, **options):
        ...

    def run(self, args: List[str]):
        return self.handle(**vars(self.parser.parse_args(args)))

    def help(self):
        self.parser.print_help()

    def load_input(self, path: Optional[str]) -> Any:
        """
        Read the report input document.

        Args:
            path: JSON file, or '-' / None for stdin

        Raises:
            BadRequestError: If the file is missing
            ValidationException: If the content is not valid JSON
        """
        try:
            if path in (None, "", "-"):
                return json.load(sys.stdin)
            with open(Path(path), encoding="utf-8") as handle:
                return json.load(handle)
        except FileNotFoundError:
            raise BadRequestError(f"Input file not found: {path}")
        except json.JSONDecodeError as e:
            raise ValidationException(f"Invalid JSON input: {e}", field="input", value=path)

    def _emit(self, kind: str, message: str):
        color, symbol = _STYLES[kind]
        print(f"\033[{color}m{symbol} {message}\033[0m")

    def print_success(self, message: str):
        self._emit("success", message)

    def print_error(self, message: str):
        self._emit("error", message)

    def print_warning(self, message: str):
        self._emit("warning", message)

    def print_info(self, message: str):
        self._emit("info", message)
