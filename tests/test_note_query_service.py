import pytest

from app.infra.supabase.errors import StoreError
from app.infra.supabase.repositories.notes import NoteRepository, build_search_filter
from app.models.note import NoteFilters
from app.services.notes import NoteQueryService
from app.services.notes.note_query_service import build_pagination
from tests.conftest import ALICE_ID, BOB_ID
from tests.fakes import seed_category, seed_label, seed_note


@pytest.fixture
def service(supabase):
    return NoteQueryService(NoteRepository(supabase))


def titles(response):
    return [item.title for item in response.data]


class TestBuildPagination:
    def test_first_of_several_pages(self):
        pagination = build_pagination(1, 12, 30)
        assert pagination.total_pages == 3
        assert pagination.has_next_page is True
        assert pagination.has_prev_page is False

    def test_last_page(self):
        pagination = build_pagination(3, 12, 30)
        assert pagination.has_next_page is False
        assert pagination.has_prev_page is True

    def test_empty(self):
        pagination = build_pagination(1, 12, 0)
        assert pagination.total_pages == 0
        assert pagination.has_next_page is False

    def test_serializes_camel_case(self):
        dumped = build_pagination(2, 5, 11).model_dump(by_alias=True)
        assert dumped == {
            "currentPage": 2,
            "totalPages": 3,
            "totalCount": 11,
            "limit": 5,
            "hasNextPage": True,
            "hasPrevPage": True,
        }


class TestBuildSearchFilter:
    def test_matches_title_or_content(self):
        assert build_search_filter("milk") == 'title.ilike."%milk%",content.ilike."%milk%"'

    def test_quotes_are_escaped(self):
        assert build_search_filter('say "hi"') == 'title.ilike."%say \\"hi\\"%",content.ilike."%say \\"hi\\"%"'


async def test_absent_table_yields_empty_page(supabase, service):
    supabase.store.missing_tables.add("posts")

    response = await service.list(ALICE_ID, NoteFilters(page=3, limit=12))

    assert response.data == []
    assert response.pagination.current_page == 1
    assert response.pagination.total_count == 0
    assert response.pagination.total_pages == 0
    assert response.pagination.limit == 12


async def test_newest_first_and_owner_scoped(supabase, service):
    seed_note(supabase, ALICE_ID, title="first")
    seed_note(supabase, BOB_ID, title="bob's")
    seed_note(supabase, ALICE_ID, title="second")
    seed_note(supabase, ALICE_ID, title="third")

    response = await service.list(ALICE_ID, NoteFilters())

    assert titles(response) == ["third", "second", "first"]
    assert response.pagination.total_count == 3
    assert all(item.user_id == ALICE_ID for item in response.data)


async def test_pages_are_sliced_in_the_store(supabase, service):
    for i in range(5):
        seed_note(supabase, ALICE_ID, title=f"note {i}")

    response = await service.list(ALICE_ID, NoteFilters(page=2, limit=2))

    assert titles(response) == ["note 2", "note 1"]
    assert response.pagination.total_pages == 3
    assert response.pagination.has_next_page is True
    assert response.pagination.has_prev_page is True


async def test_embeds_category_and_labels(supabase, service):
    category = seed_category(supabase, ALICE_ID, "Work", icon="💼")
    urgent = seed_label(supabase, ALICE_ID, "Urgent", color="#F59E0B")
    seed_note(supabase, ALICE_ID, title="plan", category_id=category["id"], label_ids=[urgent["id"]])

    response = await service.list(ALICE_ID, NoteFilters())

    item = response.data[0]
    assert item.category.name == "Work"
    assert item.category.icon == "💼"
    assert [(label.id, label.name) for label in item.labels] == [(urgent["id"], "Urgent")]


async def test_filters_by_draft_visibility_and_category(supabase, service):
    work = seed_category(supabase, ALICE_ID, "Work")
    seed_note(supabase, ALICE_ID, title="draft", is_draft=True)
    seed_note(supabase, ALICE_ID, title="public", is_public=True, public_share_token="t" * 64)
    seed_note(supabase, ALICE_ID, title="work", category_id=work["id"])

    drafts = await service.list(ALICE_ID, NoteFilters(is_draft=True))
    published = await service.list(ALICE_ID, NoteFilters(is_draft=False))
    public = await service.list(ALICE_ID, NoteFilters(is_public=True))
    in_work = await service.list(ALICE_ID, NoteFilters(category_id=work["id"]))

    assert titles(drafts) == ["draft"]
    assert titles(published) == ["work", "public"]
    assert titles(public) == ["public"]
    assert titles(in_work) == ["work"]


async def test_total_count_ignores_non_owner_filters(supabase, service):
    seed_note(supabase, ALICE_ID, title="a")
    seed_note(supabase, ALICE_ID, title="b", is_draft=True)
    seed_note(supabase, ALICE_ID, title="c")

    response = await service.list(ALICE_ID, NoteFilters(is_draft=True))

    assert titles(response) == ["b"]
    assert response.pagination.total_count == 3


async def test_search_matches_title_or_content_case_insensitively(supabase, service):
    seed_note(supabase, ALICE_ID, title="Groceries", content="buy MILK")
    seed_note(supabase, ALICE_ID, title="Milkshake recipe", content="blend")
    seed_note(supabase, ALICE_ID, title="Other", content="nothing")

    response = await service.list(ALICE_ID, NoteFilters(search="milk"))

    assert sorted(titles(response)) == ["Groceries", "Milkshake recipe"]


async def test_search_with_comma_and_quotes(supabase, service):
    seed_note(supabase, ALICE_ID, title="Hello, world")
    seed_note(supabase, ALICE_ID, title='She said "hi"')
    seed_note(supabase, ALICE_ID, title="Hello")

    comma = await service.list(ALICE_ID, NoteFilters(search="o, w"))
    quoted = await service.list(ALICE_ID, NoteFilters(search='"hi"'))

    assert titles(comma) == ["Hello, world"]
    assert titles(quoted) == ['She said "hi"']


async def test_label_filter_applies_after_pagination(supabase, service):
    urgent = seed_label(supabase, ALICE_ID, "Urgent")
    seed_note(supabase, ALICE_ID, title="old urgent", label_ids=[urgent["id"]])
    seed_note(supabase, ALICE_ID, title="newer")
    seed_note(supabase, ALICE_ID, title="newest")

    first_page = await service.list(ALICE_ID, NoteFilters(label_ids=[urgent["id"]], page=1, limit=2))
    second_page = await service.list(ALICE_ID, NoteFilters(label_ids=[urgent["id"]], page=2, limit=2))

    # The only labelled note sits outside the first page
    assert first_page.data == []
    assert first_page.pagination.total_count == 3
    assert titles(second_page) == ["old urgent"]


async def test_label_filter_matches_any_requested_label(supabase, service):
    two = seed_label(supabase, ALICE_ID, "two")
    five = seed_label(supabase, ALICE_ID, "five")
    other = seed_label(supabase, ALICE_ID, "other")
    seed_note(supabase, ALICE_ID, title="A", label_ids=[two["id"]])
    seed_note(supabase, ALICE_ID, title="B", label_ids=[other["id"]])
    seed_note(supabase, ALICE_ID, title="C", label_ids=[five["id"], other["id"]])

    response = await service.list(ALICE_ID, NoteFilters(label_ids=[two["id"], five["id"]]))

    assert titles(response) == ["C", "A"]


async def test_failed_count_falls_back_to_page_length(supabase, service, monkeypatch):
    seed_note(supabase, ALICE_ID, title="a")
    seed_note(supabase, ALICE_ID, title="b")

    async def broken_count(user_id):
        raise StoreError("count failed")

    monkeypatch.setattr(service._notes, "count_for_owner", broken_count)

    response = await service.list(ALICE_ID, NoteFilters())

    assert response.pagination.total_count == 2
    assert len(response.data) == 2


class TestFlatFallback:
    @pytest.fixture(autouse=True)
    def undeclared_relationships(self, supabase):
        supabase.store.relationships_declared = False

    async def test_returns_notes_without_embeds(self, supabase, service):
        category = seed_category(supabase, ALICE_ID, "Work")
        label = seed_label(supabase, ALICE_ID, "Urgent")
        seed_note(supabase, ALICE_ID, title="a", category_id=category["id"], label_ids=[label["id"]])

        response = await service.list(ALICE_ID, NoteFilters())

        item = response.data[0]
        assert item.title == "a"
        assert item.category_id == category["id"]
        assert item.category is None
        assert item.labels == []

    async def test_paginates_in_memory(self, supabase, service):
        for i in range(5):
            seed_note(supabase, ALICE_ID, title=f"note {i}")

        response = await service.list(ALICE_ID, NoteFilters(page=3, limit=2))

        assert titles(response) == ["note 0"]
        assert response.pagination.total_count == 5
        assert response.pagination.total_pages == 3
        assert response.pagination.has_next_page is False

    async def test_page_never_exceeds_limit(self, supabase, service):
        for i in range(7):
            seed_note(supabase, ALICE_ID, title=f"note {i}")

        response = await service.list(ALICE_ID, NoteFilters(limit=3))

        assert len(response.data) <= 3

    async def test_label_filter_is_ignored_without_label_data(self, supabase, service):
        label = seed_label(supabase, ALICE_ID, "Urgent")
        seed_note(supabase, ALICE_ID, title="labelled", label_ids=[label["id"]])
        seed_note(supabase, ALICE_ID, title="plain")

        response = await service.list(ALICE_ID, NoteFilters(label_ids=[label["id"]]))

        assert titles(response) == ["plain", "labelled"]
        assert response.pagination.total_count == 2

    async def test_still_applies_column_filters(self, supabase, service):
        seed_note(supabase, ALICE_ID, title="draft", is_draft=True)
        seed_note(supabase, ALICE_ID, title="done")
        seed_note(supabase, BOB_ID, title="bob draft", is_draft=True)

        response = await service.list(ALICE_ID, NoteFilters(is_draft=True))

        assert titles(response) == ["draft"]
        assert response.pagination.total_count == 1


async def test_other_store_errors_propagate(supabase, service):
    supabase.store.failures["posts"] = {"message": "connection reset", "code": "08006"}

    with pytest.raises(StoreError) as exc_info:
        await service.list(ALICE_ID, NoteFilters())

    assert "connection reset" in exc_info.value.message
