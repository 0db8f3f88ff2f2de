# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Tests for the rescue request status machine.
"""

import pytest

from domain.errors import InvalidStatusTransition
from domain.rescues import RescueAction, allowed_sources, can_transition, next_status
from models.enums import RescueStatus


class TestRescueWorkflow:
    """Test status transitions."""

    @pytest.mark.parametrize("current,action,expected", [
        (RescueStatus.PENDING, RescueAction.ASSIGN, RescueStatus.ASSIGNED),
        (RescueStatus.ASSIGNED, RescueAction.ASSIGN, RescueStatus.ASSIGNED),
        (RescueStatus.ASSIGNED, RescueAction.ACCEPT, RescueStatus.ACCEPTED),
        (RescueStatus.ASSIGNED, RescueAction.REJECT, RescueStatus.PENDING),
        (RescueStatus.ACCEPTED, RescueAction.RESOLVE, RescueStatus.RESOLVED),
    ])
    def test_allowed_transitions(self, current, action, expected):
        assert next_status(current, action) == expected

    @pytest.mark.parametrize("current,action", [
        (RescueStatus.ACCEPTED, RescueAction.ASSIGN),
        (RescueStatus.RESOLVED, RescueAction.ASSIGN),
        (RescueStatus.PENDING, RescueAction.ACCEPT),
        (RescueStatus.PENDING, RescueAction.REJECT),
        (RescueStatus.ASSIGNED, RescueAction.RESOLVE),
        (RescueStatus.RESOLVED, RescueAction.RESOLVE),
    ])
    def test_rejected_transitions(self, current, action):
        assert not can_transition(current, action)
        with pytest.raises(InvalidStatusTransition):
            next_status(current, action)

    def test_error_names_status_and_action(self):
        with pytest.raises(InvalidStatusTransition) as exc_info:
            next_status(RescueStatus.RESOLVED, RescueAction.ASSIGN)

        assert exc_info.value.status_code == 409
        assert exc_info.value.message == "Cannot assign a rescue request with status 'resolved'"

    def test_accepts_plain_status_strings(self):
        assert can_transition("pending", RescueAction.ASSIGN)
        assert next_status("assigned", RescueAction.ACCEPT) == RescueStatus.ACCEPTED

    def test_assignment_sources(self):
        assert allowed_sources(RescueAction.ASSIGN) == {RescueStatus.PENDING, RescueStatus.ASSIGNED}
