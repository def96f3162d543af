from datetime import date

from pydantic import BaseModel

from pagekeeper import MemorySource
from pagekeeper.core.filtering import apply_equality_filters


class Book(BaseModel):
    id: int
    title: str
    published: date
    available: bool


BOOKS = [
    Book(id=1, title="Dune", published=date(1965, 8, 1), available=True),
    Book(id=2, title="Emma", published=date(1815, 12, 23), available=False),
    Book(id=3, title="Dune", published=date(1984, 1, 1), available=False),
]


class TestApplyEqualityFilters:
    async def test_converts_values_to_field_types(self):
        applied, source = apply_equality_filters(
            MemorySource(BOOKS), Book, [("available", "false"), ("published", "1984-01-01")]
        )
        assert applied == [("available", "false"), ("published", "1984-01-01")]
        assert [b.id for b in await source.all()] == [3]

    async def test_keys_match_fields_ignoring_case(self):
        applied, source = apply_equality_filters(MemorySource(BOOKS), Book, [("TITLE", "Dune")])
        assert applied == [("TITLE", "Dune")]
        assert [b.id for b in await source.all()] == [1, 3]

    async def test_first_value_wins_for_repeated_keys(self):
        applied, source = apply_equality_filters(
            MemorySource(BOOKS), Book, [("id", "2"), ("Id", "3")]
        )
        assert applied == [("id", "2")]
        assert [b.id for b in await source.all()] == [2]

    async def test_unknown_fields_and_bad_values_are_skipped(self):
        records = MemorySource(BOOKS)
        applied, source = apply_equality_filters(
            records, Book, [("author", "Herbert"), ("id", "one"), ("published", "soon")]
        )
        assert applied == []
        assert source is records

    async def test_reserved_parameters_are_excluded(self):
        applied, _ = apply_equality_filters(
            MemorySource(BOOKS), Book, [("id", "1"), ("limit", "5")], exclude={"id", "limit"}
        )
        assert applied == []

    def test_no_model_means_no_filters(self):
        records = MemorySource([])
        assert apply_equality_filters(records, None, [("id", "1")]) == ([], records)
