"""Tests for the install queue helpers."""

import pytest

from tsinit.domain.models import Dependency
from tsinit.services.sequencer import begin_install, complete_install, next_candidate


def test_next_candidate_skips_unselected_installed_and_installing():
    deps = [
        Dependency(name="a", selected=False),
        Dependency(name="b", installed=True),
        Dependency(name="c", installing=True),
        Dependency(name="d"),
    ]

    assert next_candidate(deps) == 3


def test_next_candidate_returns_none_when_exhausted():
    deps = [Dependency(name="a", installed=True), Dependency(name="b", selected=False)]

    assert next_candidate(deps) is None
    assert next_candidate([]) is None


def test_begin_install_refuses_a_second_in_flight_entry():
    deps = [Dependency(name="a"), Dependency(name="b")]
    begin_install(deps, 0)

    with pytest.raises(RuntimeError):
        begin_install(deps, 1)
    assert [dep.installing for dep in deps] == [True, False]


def test_complete_install_only_accepts_in_flight_entry():
    deps = [Dependency(name="a")]

    assert complete_install(deps, 0) is False

    begin_install(deps, 0)
    assert complete_install(deps, 0) is True
    assert deps[0].installed is True
    assert deps[0].installing is False
