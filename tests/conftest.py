"""Shared fixtures for jiractl test suite."""

from __future__ import annotations

import pytest

from jiractl.core.models import JiraConfig, Transition
from tests.helpers import SERVER


@pytest.fixture
def sample_config() -> JiraConfig:
    """A complete set of credentials."""
    return JiraConfig(server=SERVER, email="ada@example.com", api_token="secret-token")


@pytest.fixture
def workflow_transitions() -> list[Transition]:
    """A typical software workflow's outgoing transitions."""
    return [
        Transition(id="11", name="To Do", target_status_name="To Do"),
        Transition(id="21", name="In Progress", target_status_name="In Progress"),
        Transition(id="31", name="Done", target_status_name="Done"),
        Transition(id="41", name="Done (QA)", target_status_name="Done"),
    ]
