"""
# utilkit Core Library

This package contains the core building blocks of utilkit: bounded buffers,
bit operations, string and filesystem helpers, scalar kinds, and the
configuration and logging infrastructure they share.

These components are designed to be reusable, testable, and independent of
one another apart from that shared infrastructure.
"""
