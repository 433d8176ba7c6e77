"""Day registry.

Each solver module in this package is named `dayNN.py` and registers itself:

    from aoc_runner.days import DAYS

    @DAYS.register(1)
    class Solution:
        @classmethod
        def initialize(cls, data: bytes, debug: int) -> "Solution":
            ...

Objects with an `initialize` attribute are registered through it; any other
callable is used as the factory directly.
"""
from __future__ import annotations

import importlib
import logging
import pkgutil
import re
from typing import Any, Callable, Dict, List, Optional

from ..errors import DayNotFound
from ..solver import SolverFactory

logger = logging.getLogger("aoc_runner.days")

_DAY_MODULE_RE = re.compile(r"^day(\d{2})$")


class DayRegistry:
    def __init__(self, name: str = "DAYS"):
        self._name = name
        self._factories: Dict[int, SolverFactory] = {}

    def __repr__(self):
        return f"{self.__class__.__name__}(name={self._name}, days={self.available()})"

    def __contains__(self, day: int) -> bool:
        return day in self._factories

    def register(self, day: int, solver: Optional[Any] = None):
        """Register a solver for `day`. Works as a decorator or a plain call."""
        if solver is None:
            def _register(obj):
                self._register(day, obj)
                return obj
            return _register
        self._register(day, solver)
        return solver

    def _register(self, day: int, obj: Any) -> None:
        if day in self._factories:
            raise KeyError(f"Day {day} is already registered in '{self._name}' registry.")
        factory: Callable = getattr(obj, "initialize", obj)
        if not callable(factory):
            raise TypeError(f"Solver for day {day} is not callable: {obj!r}")
        self._factories[day] = factory

    def get(self, day: int) -> SolverFactory:
        try:
            return self._factories[day]
        except KeyError:
            raise DayNotFound(day) from None

    def available(self) -> List[int]:
        return sorted(self._factories)

    def discover(self, package: str = __name__) -> List[int]:
        """Import every dayNN module in `package` so it can register itself."""
        pkg = importlib.import_module(package)
        for info in pkgutil.iter_modules(pkg.__path__):
            if _DAY_MODULE_RE.match(info.name):
                importlib.import_module(f"{package}.{info.name}")
                logger.debug("Loaded solver module %s", info.name)
        return self.available()


DAYS = DayRegistry()
