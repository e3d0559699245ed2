"""Test helpers: fixture roles and resolvers used across the test suite.

- roles: plain and parameterized roles that exercise attributes,
  requirements, role consumption and conflicts
- resolvers: RoleResolver subclasses that record what they were asked for
"""
from __future__ import annotations
