from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))


class FakeCompletions:
    """Stands in for `client.chat.completions`; records every call."""

    def __init__(self, reply=None, error=None, no_choices=False):
        self.reply = reply
        self.error = error
        self.no_choices = no_choices
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        if self.no_choices:
            return SimpleNamespace(choices=[])
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.reply))])


@pytest.fixture
def fake_client():
    def _make(reply=None, error=None, no_choices=False):
        completions = FakeCompletions(reply=reply, error=error, no_choices=no_choices)
        return SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return _make
