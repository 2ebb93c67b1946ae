# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""Request assembly and the low-level REST transport (internal)."""

__all__ = []
