"""Shared fixtures for mayactl tests"""

import io
from pathlib import Path

import pytest
from rich.console import Console

from mayactl.installer import FetchError, StepResult
from mayactl.installer import constants


class ScriptedRunner:
    """In-memory runner returning canned results keyed by program or script"""

    def __init__(self, results=None):
        self.results = results or {}
        self.calls = []

    def run(self, program, args=(), capture=False, env=None):
        args = list(args)
        self.calls.append({"program": program, "args": args, "capture": capture, "env": env})

        key = args[0] if args else program
        result = self.results.get(key, StepResult(0))
        if callable(result):
            result = result(program, args)
        return result

    @property
    def invoked(self):
        return [call["args"][0] if call["args"] else call["program"] for call in self.calls]


class FakeFetcher:
    """Writes a bootstrap script, or fails after leaving a partial file"""

    def __init__(self, fail=False, content=b"#!/bin/sh\necho bootstrap\n"):
        self.fail = fail
        self.content = content
        self.fetched = []

    def fetch(self, url, dest: Path):
        self.fetched.append(url)
        if self.fail:
            dest.write_bytes(self.content[:4])
            raise FetchError(f"HTTP 404 fetching {url}")
        dest.write_bytes(self.content)


@pytest.fixture
def runner():
    return ScriptedRunner()


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def artifact(tmp_path):
    return tmp_path / constants.BOOTSTRAP_SCRIPT


@pytest.fixture
def failing_fetcher():
    return FakeFetcher(fail=True)
