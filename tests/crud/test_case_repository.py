import pytest

from app.core.errors import CaseStoreError
from app.crud.case import CaseRepository
from app.crud.case_history import CaseHistoryRepository
from app.schemas.case import CaseCreate
from app.schemas.history import HistoryCreate, ManualEntry
from conftest import OTHER_USER_ID, TEST_USER_ID


@pytest.fixture
def repository(fake_supabase):
    return CaseRepository(fake_supabase)


def case_in(**fields) -> CaseCreate:
    values = {
        "previous_date": "2024-01-01T10:00:00+00:00",
        "next_date": "2024-01-10T10:00:00+00:00",
        "case_details": "Smith v. Jones",
    }
    values.update(fields)
    return CaseCreate(**values)


async def test_create_stamps_owner(repository, fake_supabase):
    created = await repository.create_case(case_in(), TEST_USER_ID)

    (row,) = fake_supabase.tables["cases"]
    assert row["user_id"] == str(TEST_USER_ID)
    assert row["status"] == "pending"
    assert created.user_id == TEST_USER_ID


async def test_list_is_ordered_by_next_date(repository):
    await repository.create_case(case_in(case_details="later", next_date="2024-03-01T10:00:00+00:00"), TEST_USER_ID)
    await repository.create_case(case_in(case_details="sooner", next_date="2024-02-01T10:00:00+00:00"), TEST_USER_ID)
    await repository.create_case(case_in(case_details="not mine"), OTHER_USER_ID)

    cases = await repository.list_cases(TEST_USER_ID)

    assert [c.case_details for c in cases] == ["sooner", "later"]


async def test_get_case_of_other_owner_is_none(repository):
    created = await repository.create_case(case_in(), TEST_USER_ID)

    assert await repository.get_case(created.id, OTHER_USER_ID) is None


async def test_missing_owner_skips_insert(repository, fake_supabase):
    assert await repository.create_case(case_in(), None) is None
    assert fake_supabase.tables.get("cases", []) == []


async def test_backend_error_is_surfaced(repository, fake_supabase):
    fake_supabase.failing_tables["cases"] = "permission denied for table cases"

    with pytest.raises(CaseStoreError) as exc_info:
        await repository.list_cases(TEST_USER_ID)

    assert exc_info.value.message == "permission denied for table cases"
    assert exc_info.value.operation == "list_cases"


async def test_history_entry_defaults_action(fake_supabase):
    repository = CaseHistoryRepository(fake_supabase)
    entry = HistoryCreate(event_date="2024-03-01", notes="Called the client")

    created = await repository.create_entry("6a1c1b84-46e9-4d0e-9d52-3f8a0f0d9c11", entry, ["a/b.pdf"], TEST_USER_ID)

    assert isinstance(created, ManualEntry)
    assert created.action == "Manual update"
    assert created.document_files == ["a/b.pdf"]
    assert created.document_links is None
    assert fake_supabase.tables["case_history"][0]["created_by"] == str(TEST_USER_ID)


async def test_malformed_history_rows_are_surfaced(fake_supabase):
    case_id = "6a1c1b84-46e9-4d0e-9d52-3f8a0f0d9c11"
    fake_supabase.tables["case_history"] = [{
        "id": "0f8fad5b-d9cb-469f-a165-70867728950e",
        "case_id": case_id,
        "action": "Imported",
        "source": "imported",
        "created_at": "2024-01-01T10:00:00+00:00",
    }]

    with pytest.raises(CaseStoreError) as exc_info:
        await CaseHistoryRepository(fake_supabase).list_history_rows(case_id)

    assert exc_info.value.operation == "list_history_rows"
