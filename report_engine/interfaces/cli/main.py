#!/usr/bin/env python3
"""
Command line entry point.

Every module in ``report_engine.interfaces.cli.commands`` that defines a
``Command`` class becomes a sub-command named after the module.
"""

import argparse
import importlib
import logging
import pkgutil
import sys
from typing import Dict, List, Optional, Type

from report_engine.core.exceptions import AppException
from report_engine.core.logging import setup_logging
from report_engine.interfaces.cli import commands as commands_package
from report_engine.interfaces.cli.commands.base import BaseCommand

logger = logging.getLogger(__name__)

PROG = "python manage.py"
SKIPPED_MODULES = {"base"}


class CLIManager:
    def __init__(self):
        self.available_commands: Dict[str, Type[BaseCommand]] = self._discover_commands()

    def _discover_commands(self) -> Dict[str, Type[BaseCommand]]:
        found: Dict[str, Type[BaseCommand]] = {}
        for module_info in sorted(pkgutil.iter_modules(commands_package.__path__), key=lambda m: m.name):
            name = module_info.name
            if name.startswith("_") or name in SKIPPED_MODULES:
                continue
            module = importlib.import_module(f"{commands_package.__name__}.{name}")
            command_class = getattr(module, "Command", None)
            if command_class is not None:
                found[name] = command_class
        return found

    def print_usage(self):
        print("Report Engine CLI")
        print(f"Usage: {PROG} [--verbose] <command> [args...]")
        print()
        print("Commands:")
        for name, command_class in self.available_commands.items():
            print(f"  {name:<16} {command_class.description}")
        print()
        print(f"Run '{PROG} help <command>' for the options of one command.")

    def print_command_help(self, command_name: str) -> int:
        command_class = self.available_commands.get(command_name)
        if command_class is None:
            print(f"Unknown command: {command_name}")
            return 1
        command_class().help()
        return 0

    def run_command(self, command_name: str, args: List[str]) -> int:
        """Run one command; returns the process exit code."""
        command_class = self.available_commands.get(command_name)
        if command_class is None:
            print(f"Unknown command: {command_name}")
            print(f"Run '{PROG} help' to list commands.")
            return 1

        command = command_class()
        try:
            command.run(args)
        except AppException as e:
            logger.debug(f"{command_name} failed", exc_info=True)
            command.print_error(e.message)
            return 1
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog=PROG, add_help=False)
    parser.add_argument("command", nargs="?")
    parser.add_argument("--verbose", "-v", action="store_true")

    args, rest = parser.parse_known_args(argv)
    manager = CLIManager()

    if args.command in (None, "help"):
        if rest:
            return manager.print_command_help(rest[0])
        manager.print_usage()
        return 0

    setup_logging("DEBUG" if args.verbose else None)
    return manager.run_command(args.command, rest)


if __name__ == "__main__":
    sys.exit(main())
