# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""
Data models and type definitions for the TeamDesk SDK.

- :class:`~teamdesk_sdk.models.record.Record`: Row representation with dict-like access.
- :class:`~teamdesk_sdk.models.query_builder.QueryBuilder`: Fluent query builder and paginator.
- :class:`~teamdesk_sdk.models.write_result.WriteResult`: Per-record outcome of a write.
- :class:`~teamdesk_sdk.models.schema.TableSchema`: Table metadata from ``describe``.

Note:
    This ``__init__.py`` does NOT import/export models. Import directly from
    the specific module files to avoid duplicate entries in generated docs.
"""

__all__ = []
