# SPDX-License-Identifier: Apache-2.0

"""
Domain logic package for the rescue dispatch service.

This package contains pure business logic functions with no side effects:
distance computation, volunteer matching, the rescue status workflow and
message formatting. All of it is testable without external dependencies.
"""
