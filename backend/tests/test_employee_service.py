"""
EMS Backend — Employee Service Unit Tests
==========================================

What:  Tests for EmployeeService against a real in-memory store.
How:   Each test gets a fresh store (see conftest.py); store failures are
       simulated by patching the session.

What we test:
    ✅ Create validates presence of name, role and status
    ✅ Ids are strictly increasing and never reused after deletes
    ✅ Every id-targeted operation raises NotFoundError for unknown ids
    ✅ Update is a full overwrite; omitted fields become null
    ✅ Search is a case-sensitive substring match; empty query matches all
    ✅ Details use left-join semantics (dangling role → role_name None)
    ✅ Engine errors surface as DatabaseError with a fixed message
"""

import pytest
from unittest.mock import AsyncMock, patch

from ems.exceptions import DatabaseError, NotFoundError, ValidationError
from ems.schemas.employee import EmployeeCreate, EmployeeUpdate
from ems.schemas.role import RoleCreate
from ems.services.employee_service import EmployeeService
from ems.services.role_service import RoleService


def _payload(name="Ana", role="eng", status="active"):
    return EmployeeCreate(name=name, role=role, status=status)


class TestEmployeeCreate:
    """Tests for create_employee."""

    def setup_method(self):
        self.service = EmployeeService()

    @pytest.mark.asyncio
    async def test_create_returns_full_record(self, db_session):
        result = await self.service.create_employee(db_session, _payload())

        assert result.id == 1
        assert result.name == "Ana"
        assert result.role == "eng"
        assert result.status == "active"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["name", "role", "status"])
    async def test_create_missing_field_rejected(self, db_session, missing):
        """Any absent field should raise ValidationError naming it."""
        data = {"name": "Ana", "role": "eng", "status": "active"}
        data[missing] = None

        with pytest.raises(ValidationError, match="Missing required fields.") as exc_info:
            await self.service.create_employee(db_session, EmployeeCreate(**data))

        assert exc_info.value.context["fields"] == [missing]

    @pytest.mark.asyncio
    async def test_create_empty_string_rejected(self, db_session):
        """Empty strings count as missing."""
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_employee(db_session, _payload(name="", status=""))

        assert exc_info.value.context["fields"] == ["name", "status"]

    @pytest.mark.asyncio
    async def test_ids_strictly_increase(self, db_session):
        ids = []
        for name in ("Ana", "Bo", "Cy", "Di"):
            created = await self.service.create_employee(db_session, _payload(name=name))
            ids.append(created.id)

        assert ids == sorted(ids)
        assert len(set(ids)) == len(ids)

    @pytest.mark.asyncio
    async def test_ids_never_reused_after_delete(self, db_session):
        """Deleting the highest id must not make it available again."""
        await self.service.create_employee(db_session, _payload(name="Ana"))
        second = await self.service.create_employee(db_session, _payload(name="Bo"))
        await self.service.delete_employee(db_session, second.id)

        third = await self.service.create_employee(db_session, _payload(name="Cy"))

        assert third.id == 3

    @pytest.mark.asyncio
    async def test_create_store_failure(self, db_session, store_failure):
        with patch.object(db_session, "flush", AsyncMock(side_effect=store_failure)):
            with pytest.raises(DatabaseError, match="Failed to create employee."):
                await self.service.create_employee(db_session, _payload())


class TestEmployeeLookup:
    """Tests for get_employee and get_details."""

    def setup_method(self):
        self.service = EmployeeService()
        self.roles = RoleService()

    @pytest.mark.asyncio
    async def test_get_existing(self, db_session):
        created = await self.service.create_employee(db_session, _payload())

        result = await self.service.get_employee(db_session, created.id)

        assert result == created

    @pytest.mark.asyncio
    async def test_get_unknown_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError, match="Employee not found."):
            await self.service.get_employee(db_session, 42)

    @pytest.mark.asyncio
    async def test_get_store_failure(self, db_session, store_failure):
        with patch.object(db_session, "execute", AsyncMock(side_effect=store_failure)):
            with pytest.raises(DatabaseError, match="Failed to retrieve employee."):
                await self.service.get_employee(db_session, 1)

    @pytest.mark.asyncio
    async def test_details_with_existing_role(self, db_session):
        created = await self.service.create_employee(db_session, _payload(role="eng"))
        await self.roles.create_role(db_session, RoleCreate(name="eng"))

        details = await self.service.get_details(db_session, created.id)

        assert details.role == "eng"
        assert details.role_name == "eng"

    @pytest.mark.asyncio
    async def test_details_with_dangling_role(self, db_session):
        """A role with no roles row is not an error: role_name is None."""
        created = await self.service.create_employee(db_session, _payload(role="ghost"))

        details = await self.service.get_details(db_session, created.id)

        assert details.id == created.id
        assert details.role == "ghost"
        assert details.role_name is None

    @pytest.mark.asyncio
    async def test_details_unknown_employee(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.get_details(db_session, 7)


class TestEmployeeMutations:
    """Tests for update, delete, assign_role and update_status."""

    def setup_method(self):
        self.service = EmployeeService()

    @pytest.mark.asyncio
    async def test_update_then_get_returns_written_fields(self, db_session):
        created = await self.service.create_employee(db_session, _payload())

        updated = await self.service.update_employee(
            db_session, created.id, EmployeeUpdate(name="Ana B", role="ops", status="leave")
        )
        fetched = await self.service.get_employee(db_session, created.id)

        assert updated == fetched
        assert (fetched.name, fetched.role, fetched.status) == ("Ana B", "ops", "leave")

    @pytest.mark.asyncio
    async def test_update_omitted_fields_become_null(self, db_session):
        """Full overwrite: fields left out are not preserved."""
        created = await self.service.create_employee(db_session, _payload())

        await self.service.update_employee(db_session, created.id, EmployeeUpdate(name="Ana"))
        fetched = await self.service.get_employee(db_session, created.id)

        assert fetched.name == "Ana"
        assert fetched.role is None
        assert fetched.status is None

    @pytest.mark.asyncio
    async def test_delete_then_get_not_found(self, db_session):
        created = await self.service.create_employee(db_session, _payload())

        result = await self.service.delete_employee(db_session, created.id)

        assert result.message == "Employee deleted successfully."
        with pytest.raises(NotFoundError):
            await self.service.get_employee(db_session, created.id)

    @pytest.mark.asyncio
    async def test_assign_role_sets_only_role(self, db_session):
        created = await self.service.create_employee(db_session, _payload())

        result = await self.service.assign_role(db_session, created.id, "qa")
        fetched = await self.service.get_employee(db_session, created.id)

        assert result.message == "Role assigned successfully."
        assert (fetched.name, fetched.role, fetched.status) == ("Ana", "qa", "active")

    @pytest.mark.asyncio
    async def test_update_status_sets_only_status(self, db_session):
        created = await self.service.create_employee(db_session, _payload())

        result = await self.service.update_status(db_session, created.id, "inactive")
        fetched = await self.service.get_employee(db_session, created.id)

        assert result.message == "Employee status updated successfully."
        assert (fetched.name, fetched.role, fetched.status) == ("Ana", "eng", "inactive")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "operation",
        [
            lambda s, db: s.update_employee(db, 99, EmployeeUpdate(name="x", role="y", status="z")),
            lambda s, db: s.delete_employee(db, 99),
            lambda s, db: s.assign_role(db, 99, "eng"),
            lambda s, db: s.update_status(db, 99, "active"),
        ],
        ids=["update", "delete", "assign_role", "update_status"],
    )
    async def test_unknown_id_raises_not_found(self, db_session, operation):
        await self.service.create_employee(db_session, _payload())

        with pytest.raises(NotFoundError, match="Employee not found."):
            await operation(self.service, db_session)

    @pytest.mark.asyncio
    async def test_update_store_failure(self, db_session, store_failure):
        with patch.object(db_session, "execute", AsyncMock(side_effect=store_failure)):
            with pytest.raises(DatabaseError, match="Failed to update employee status."):
                await self.service.update_status(db_session, 1, "active")


class TestEmployeeSearch:
    """Tests for search_by_name."""

    def setup_method(self):
        self.service = EmployeeService()

    async def _seed(self, db_session):
        for name in ("Ana", "Bo", "Diana"):
            await self.service.create_employee(db_session, _payload(name=name))

    @pytest.mark.asyncio
    async def test_substring_match(self, db_session):
        await self._seed(db_session)

        result = await self.service.search_by_name(db_session, "na")

        assert [e.name for e in result] == ["Ana", "Diana"]

    @pytest.mark.asyncio
    async def test_match_is_case_sensitive(self, db_session):
        await self._seed(db_session)

        assert [e.name for e in await self.service.search_by_name(db_session, "An")] == ["Ana"]
        assert await self.service.search_by_name(db_session, "ANA") == []

    @pytest.mark.asyncio
    async def test_empty_query_returns_everyone(self, db_session):
        await self._seed(db_session)

        result = await self.service.search_by_name(db_session, "")

        assert [e.id for e in result] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_no_match_is_empty_list(self, db_session):
        await self._seed(db_session)

        assert await self.service.search_by_name(db_session, "Zed") == []

    @pytest.mark.asyncio
    async def test_search_store_failure(self, db_session, store_failure):
        with patch.object(db_session, "execute", AsyncMock(side_effect=store_failure)):
            with pytest.raises(DatabaseError, match="Failed to search employees."):
                await self.service.search_by_name(db_session, "Ana")
