"""Storage layer.

:class:`~pykvstore.storage.store.Storage` is the immutable container;
:mod:`pykvstore.storage.merge` holds the ordered merge-join every
combination operator is built on.
"""

from pykvstore.storage.merge import MergeSide, MergeStep, merge, merge_join
from pykvstore.storage.store import Storage, union_all

__all__ = ["MergeSide", "MergeStep", "Storage", "merge", "merge_join", "union_all"]
