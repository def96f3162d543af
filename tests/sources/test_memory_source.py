from dataclasses import dataclass
from typing import Optional

import pytest

from pagekeeper import MemorySource


@dataclass
class Item:
    id: int
    name: str
    rank: Optional[int] = None


ITEMS = [
    Item(3, "c", 2),
    Item(1, "a", None),
    Item(2, "b", 2),
    Item(4, "d", 1),
]


class TestMemorySourceChaining:
    def test_methods_return_new_instances(self):
        base = MemorySource(ITEMS)
        assert base.sort("id") is not base
        assert base.where("id", "eq", 1) is not base
        assert base.skip(1) is not base
        assert base.limit(1) is not base

    async def test_chaining_leaves_original_untouched(self):
        base = MemorySource(ITEMS)
        base.where("id", "gt", 2).sort("-id").limit(1)
        assert [i.id for i in await base.all()] == [3, 1, 2, 4]

    def test_model_is_inferred_from_records(self):
        assert MemorySource(ITEMS).model is Item
        assert MemorySource([]).model is None
        assert MemorySource([], model=Item).model is Item

    def test_unknown_operator_is_rejected(self):
        with pytest.raises(ValueError, match="Unsupported operator"):
            MemorySource(ITEMS).where("id", "gte", 1)


class TestMemorySourceExecution:
    async def test_sort_ascending_and_descending(self):
        source = MemorySource(ITEMS)
        assert [i.id for i in await source.sort("id").all()] == [1, 2, 3, 4]
        assert [i.id for i in await source.sort("-id").all()] == [4, 3, 2, 1]

    async def test_sort_on_several_keys(self):
        ordered = await MemorySource(ITEMS).sort("-rank", "id").all()
        assert [i.id for i in ordered] == [1, 2, 3, 4]

    async def test_missing_values_sort_last_ascending(self):
        ordered = await MemorySource(ITEMS).sort("rank", "id").all()
        assert [i.id for i in ordered] == [4, 2, 3, 1]

    async def test_comparisons(self):
        source = MemorySource(ITEMS).sort("id")
        assert [i.id for i in await source.where("id", "gt", 2).all()] == [3, 4]
        assert [i.id for i in await source.where("id", "lt", 2).all()] == [1]
        assert [i.id for i in await source.where("name", "eq", "b").all()] == [2]

    async def test_range_comparisons_skip_missing_values(self):
        source = MemorySource(ITEMS).sort("id")
        assert [i.id for i in await source.where("rank", "lt", 5).all()] == [2, 3, 4]
        assert [i.id for i in await source.where("rank", "eq", None).all()] == [1]

    async def test_conditions_combine(self):
        source = MemorySource(ITEMS).where("id", "gt", 1).where("id", "lt", 4).sort("id")
        assert [i.id for i in await source.all()] == [2, 3]

    async def test_skip_and_limit(self):
        source = MemorySource(ITEMS).sort("id")
        assert [i.id for i in await source.skip(1).limit(2).all()] == [2, 3]

    async def test_count_ignores_skip_and_limit(self):
        source = MemorySource(ITEMS).where("rank", "eq", 2).skip(1).limit(1)
        assert await source.count() == 2
