"""Pytest configuration and fixtures."""

from contextlib import contextmanager

import pytest

from simplify_lint.capabilities import CAPABILITIES, CapabilityProbe
from simplify_lint.core.config import AllWarnings
from simplify_lint.core.errors import HostError
from simplify_lint.core.report import Emitter
from simplify_lint.engine import Engine
from simplify_lint.gate import WarningGate
from simplify_lint.host import Host, HostSession
from simplify_lint.rules import default_registry


class FakeSession(HostSession):

    def __init__(self, host):
        self.host = host

    def evaluate(self, form):
        self.host.evaluated.append(form)
        if form not in self.host.accepts:
            raise HostError("wrong-number-of-arguments")


class FakeHost(Host):
    """Host double that accepts only the probe forms of the given capabilities."""

    def __init__(self, present=()):
        self.accepts = {CAPABILITIES[name].form for name in present}
        self.evaluated = []
        self.opened = 0
        self.closed = 0

    @contextmanager
    def scratch(self):
        self.opened += 1
        try:
            yield FakeSession(self)
        finally:
            self.closed += 1


@pytest.fixture
def make_probe():
    """Factory for a CapabilityProbe over a FakeHost with the given capabilities."""

    def _make(*present):
        return CapabilityProbe(FakeHost(present))

    return _make


@pytest.fixture
def make_engine():
    """Factory for an engine with default rules, all warnings on, and a list sink."""

    def _make(*present, warnings=None, messages=None):
        settings = {"warnings": AllWarnings() if warnings is None else warnings}
        sink = messages.append if messages is not None else None
        return Engine(
            registry=default_registry(),
            capabilities=CapabilityProbe(FakeHost(present)),
            gate=WarningGate(lambda: settings["warnings"]),
            emitter=Emitter(sink) if sink else None,
        )

    return _make
