import pytest
from pydantic import BaseModel

from pagekeeper import LimitOffsetPagination, MemorySource

URL = "https://www.example.com"
PAGE_SIZE = 10
MAX_PAGE_SIZE = 25

GREETINGS = [
    "Bonjour",
    "Hola",
    "Salve",
    "Guten Tag",
    "Olá",
    "Anyoung haseyo",
    "Goedendag",
    "Yassas",
    "Shalom",
    "God dag",
]


class Person(BaseModel):
    id: int
    name: str
    greetings: str
    robot: bool


@pytest.fixture
def people() -> MemorySource[Person]:
    return MemorySource(
        [
            Person(id=i, name=f"Person {i}", greetings=GREETINGS[(i - 1) % 10], robot=i % 2 == 0)
            for i in range(1, 51)
        ]
    )


def _link(query: str) -> str:
    return f"{URL}/?{query}"


async def _walk(paginator, source, params, follow: str):
    previous, following = [], []
    while True:
        paginated = await paginator.paginate(source, URL, params)
        assert paginated.count == 50
        assert len(paginated.results) == PAGE_SIZE
        previous.append(paginated.previous)
        following.append(paginated.next)
        link = getattr(paginated, follow)
        if link is None:
            return previous, following
        params = link.split("?", 1)[1]


class TestOptions:
    @pytest.fixture
    def paginator(self) -> LimitOffsetPagination:
        return LimitOffsetPagination(PAGE_SIZE, MAX_PAGE_SIZE)

    async def test_no_options(self, paginator, people):
        paginated = await paginator.paginate(people, URL, "")
        assert paginated.count == 50
        assert [p.id for p in paginated.results] == list(range(1, 11))
        assert paginated.previous is None
        assert paginated.next == _link("limit=10&offset=10")

    async def test_non_numeric_options_fall_back_to_defaults(self, paginator, people):
        paginated = await paginator.paginate(people, URL, "offset=jafar&limit=aladdin")
        assert paginated.count == 50
        assert len(paginated.results) == PAGE_SIZE
        assert paginated.previous is None
        assert paginated.next == _link("limit=10&offset=10")

    async def test_only_offset(self, paginator, people):
        paginated = await paginator.paginate(people, URL, "offset=23")
        assert [p.id for p in paginated.results] == list(range(24, 34))
        assert paginated.previous == _link("limit=10&offset=13")
        assert paginated.next == _link("limit=10&offset=33")

    async def test_small_offset_links_back_to_first_page(self, paginator, people):
        paginated = await paginator.paginate(people, URL, "offset=4")
        assert paginated.previous == _link("limit=10")

    async def test_limit_above_maximum_is_clamped(self, paginator, people):
        paginated = await paginator.paginate(people, URL, "limit=1000")
        assert len(paginated.results) == MAX_PAGE_SIZE
        assert paginated.previous is None
        assert paginated.next == _link("limit=25&offset=25")


class TestNavigations:
    @pytest.fixture
    def paginator(self) -> LimitOffsetPagination:
        return LimitOffsetPagination(PAGE_SIZE, MAX_PAGE_SIZE)

    async def test_beginning_to_end(self, paginator, people):
        previous, following = await _walk(paginator, people, None, "next")
        assert previous == [
            None,
            _link("limit=10"),
            _link("limit=10&offset=10"),
            _link("limit=10&offset=20"),
            _link("limit=10&offset=30"),
        ]
        assert following == [
            _link("limit=10&offset=10"),
            _link("limit=10&offset=20"),
            _link("limit=10&offset=30"),
            _link("limit=10&offset=40"),
            None,
        ]

    async def test_end_to_beginning(self, paginator, people):
        previous, following = await _walk(paginator, people, "offset=40&limit=10", "previous")
        assert previous == [
            _link("limit=10&offset=30"),
            _link("limit=10&offset=20"),
            _link("limit=10&offset=10"),
            _link("limit=10"),
            None,
        ]
        assert following == [
            None,
            _link("limit=10&offset=40"),
            _link("limit=10&offset=30"),
            _link("limit=10&offset=20"),
            _link("limit=10&offset=10"),
        ]


class TestQueries:
    @pytest.fixture
    def paginator(self) -> LimitOffsetPagination:
        return LimitOffsetPagination(30, 50)

    async def test_string_filter(self, paginator, people):
        paginated = await paginator.paginate(people, URL, "greetings=Bonjour")
        assert paginated.count == 5
        assert [p.id for p in paginated.results] == [1, 11, 21, 31, 41]

    async def test_int_filter(self, paginator, people):
        paginated = await paginator.paginate(people, URL, "id=1")
        assert paginated.count == 1
        assert [p.id for p in paginated.results] == [1]

    async def test_bool_filter(self, paginator, people):
        paginated = await paginator.paginate(people, URL, "robot=True")
        assert paginated.count == 25
        assert all(p.robot for p in paginated.results)

    async def test_two_filters(self, paginator, people):
        paginated = await paginator.paginate(people, URL, "robot=True&greetings=Hola")
        assert [p.id for p in paginated.results] == [2, 12, 22, 32, 42]

    async def test_three_filters(self, paginator, people):
        paginated = await paginator.paginate(people, URL, "robot=True&greetings=Hola&id=2")
        assert [p.id for p in paginated.results] == [2]

    async def test_filter_of_wrong_type_is_ignored(self, paginator, people):
        paginated = await paginator.paginate(people, URL, "id=jafar")
        assert paginated.count == 50
        assert len(paginated.results) == 30

    async def test_filters_are_carried_into_links(self, people):
        paginator = LimitOffsetPagination(2, MAX_PAGE_SIZE)
        paginated = await paginator.paginate(people, URL, {"greetings": "Hola", "offset": "2"})
        assert [p.id for p in paginated.results] == [22, 32]
        assert paginated.previous == _link("greetings=Hola&limit=2")
        assert paginated.next == _link("greetings=Hola&limit=2&offset=4")
