# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""
Operation namespace classes for the TeamDesk SDK.

- TableClient: queries, writes and schema of one table
- ViewClient: queries against a view of a table
"""

__all__ = []
