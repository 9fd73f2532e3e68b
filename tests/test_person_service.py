"""
Person API — Person Service Unit Tests
=======================================

What:  Tests PersonService resolution and error translation.
How:   Uses an AsyncMock PersonStore (no database).

What we test:
    ✅ Identifier-shaped lookups call the *_by_id operations only
    ✅ Other lookups call the by-name operations with field "name"
    ✅ Absent documents raise NotFoundError, never a name fallback
    ✅ Store failures become StoreError with the original message
    ✅ Updates forward only the supplied fields
"""

import pytest

from person_api.exceptions import CastError, NotFoundError, StoreError
from person_api.services.person_service import DELETED_MESSAGE, PersonService

PERSON_ID = "652f1f77bcf86cd799439011"
PERSON = {"_id": PERSON_ID, "name": "John Doe", "age": 30}


class TestCreatePerson:

    @pytest.mark.asyncio
    async def test_create_inserts_both_fields(self, mock_store):
        mock_store.insert.return_value = PERSON
        service = PersonService(mock_store)

        result = await service.create_person(name="John Doe", age=30)

        assert result == PERSON
        mock_store.insert.assert_awaited_once_with({"name": "John Doe", "age": 30})

    @pytest.mark.asyncio
    async def test_create_absent_fields_are_null(self, mock_store):
        mock_store.insert.return_value = {"_id": PERSON_ID, "name": None, "age": None}
        service = PersonService(mock_store)

        await service.create_person()

        mock_store.insert.assert_awaited_once_with({"name": None, "age": None})

    @pytest.mark.asyncio
    async def test_create_cast_error_becomes_store_error(self, mock_store):
        mock_store.insert.side_effect = CastError("Number", "abc", "age")
        service = PersonService(mock_store)

        with pytest.raises(StoreError) as exc_info:
            await service.create_person(name="John Doe", age="abc")

        assert exc_info.value.message == 'Cast to Number failed for value "abc" (type string) at path "age"'
        assert exc_info.value.context["operation"] == "create"


class TestGetPerson:

    @pytest.mark.asyncio
    async def test_get_by_identifier(self, mock_store):
        mock_store.find_by_id.return_value = PERSON
        service = PersonService(mock_store)

        assert await service.get_person(PERSON_ID) == PERSON
        mock_store.find_by_id.assert_awaited_once_with(PERSON_ID)
        mock_store.find_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_by_uppercase_identifier(self, mock_store):
        mock_store.find_by_id.return_value = PERSON
        service = PersonService(mock_store)

        await service.get_person(PERSON_ID.upper())
        mock_store.find_by_id.assert_awaited_once_with(PERSON_ID)

    @pytest.mark.asyncio
    async def test_get_by_name(self, mock_store):
        mock_store.find_one.return_value = PERSON
        service = PersonService(mock_store)

        assert await service.get_person("John Doe") == PERSON
        mock_store.find_one.assert_awaited_once_with("name", "John Doe")
        mock_store.find_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_identifier_does_not_fall_back_to_name(self, mock_store):
        mock_store.find_by_id.return_value = None
        service = PersonService(mock_store)

        with pytest.raises(NotFoundError) as exc_info:
            await service.get_person(PERSON_ID)

        assert exc_info.value.message == "Person not found"
        mock_store.find_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_name(self, mock_store):
        mock_store.find_one.return_value = None
        service = PersonService(mock_store)

        with pytest.raises(NotFoundError):
            await service.get_person("Nobody")

    @pytest.mark.asyncio
    async def test_store_failure_surfaces_message(self, mock_store):
        mock_store.find_one.side_effect = ConnectionError("connection reset by peer")
        service = PersonService(mock_store)

        with pytest.raises(StoreError) as exc_info:
            await service.get_person("John Doe")

        assert exc_info.value.message == "connection reset by peer"
        assert exc_info.value.context["error_type"] == "ConnectionError"


class TestUpdatePerson:

    @pytest.mark.asyncio
    async def test_update_by_identifier(self, mock_store):
        updated = {**PERSON, "name": "John Doe Updated", "age": 35}
        mock_store.update_by_id.return_value = updated
        service = PersonService(mock_store)

        result = await service.update_person(PERSON_ID, {"name": "John Doe Updated", "age": 35})

        assert result == updated
        mock_store.update_by_id.assert_awaited_once_with(
            PERSON_ID, {"name": "John Doe Updated", "age": 35}
        )
        mock_store.find_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_by_name_forwards_only_supplied_fields(self, mock_store):
        mock_store.update_one.return_value = {**PERSON, "age": 31}
        service = PersonService(mock_store)

        await service.update_person("John Doe", {"age": 31})

        mock_store.update_one.assert_awaited_once_with("name", "John Doe", {"age": 31})

    @pytest.mark.asyncio
    async def test_update_missing(self, mock_store):
        mock_store.update_by_id.return_value = None
        service = PersonService(mock_store)

        with pytest.raises(NotFoundError):
            await service.update_person(PERSON_ID, {"age": 31})


class TestDeletePerson:

    @pytest.mark.asyncio
    async def test_delete_returns_confirmation(self, mock_store):
        mock_store.delete_by_id.return_value = PERSON
        service = PersonService(mock_store)

        assert await service.delete_person(PERSON_ID) == DELETED_MESSAGE == "Person deleted successfully"
        mock_store.delete_by_id.assert_awaited_once_with(PERSON_ID)

    @pytest.mark.asyncio
    async def test_delete_by_name(self, mock_store):
        mock_store.delete_one.return_value = PERSON
        service = PersonService(mock_store)

        await service.delete_person("John Doe")
        mock_store.delete_one.assert_awaited_once_with("name", "John Doe")

    @pytest.mark.asyncio
    async def test_delete_missing(self, mock_store):
        mock_store.delete_by_id.return_value = None
        service = PersonService(mock_store)

        with pytest.raises(NotFoundError):
            await service.delete_person(PERSON_ID)
