"""
Testes do gestor de links partilhados.

O instante "agora" é sempre passado explicitamente.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from conftest import MockSharedReport, make_result

from app.core.exceptions import NotFoundError
from app.schemas.report import ReportType
from app.schemas.shared_report import LinkState
from app.services.report_builder import build_report, resolve_scope
from app.services.share_service import ShareService, link_state

T = datetime(2024, 4, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def service():
    return ShareService(default_days=30)


@pytest.fixture
def report(march_invoice, march_payment):
    scope = resolve_scope(ReportType.PAYMENTS_BY_MONTH, reference_month="2024-03")
    return build_report(scope, [march_invoice], [march_payment], [], T)


@pytest.fixture
def owner_id():
    return uuid.uuid4()


def stored_link(report, owner_id, expires_at):
    return MockSharedReport(owner_id, report.model_dump(mode="json"), expires_at)


class TestCreateLink:

    @pytest.mark.asyncio
    async def test_expires_after_default_days(self, service, mock_db, report, owner_id):
        link = await service.create_link(mock_db, report, owner_id=owner_id, now=T)

        assert link.expires_at == T + timedelta(days=30)
        assert link.user_id == owner_id
        assert link.report_title == "Pagamentos - Março 2024"
        assert link.report_type == "payments-by-month"
        assert link.report_data["summary"]["total_paid"] == "300.00"
        mock_db.add.assert_called_once_with(link)
        mock_db.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_each_link_has_its_own_id(self, service, mock_db, report, owner_id):
        first = await service.create_link(mock_db, report, owner_id=owner_id, now=T)
        second = await service.create_link(mock_db, report, owner_id=owner_id, now=T)

        assert first.id != second.id

    def test_public_url(self, service):
        link_id = uuid.uuid4()

        assert service.public_url(link_id).endswith(f"/report/{link_id}")


class TestResolveLink:

    @pytest.mark.asyncio
    async def test_active_link_returns_snapshot(self, service, mock_db, report, owner_id):
        link = stored_link(report, owner_id, T + timedelta(days=30))
        mock_db.execute.return_value = make_result(one=link)

        resolution = await service.resolve_link(mock_db, link.id, now=T + timedelta(days=29))

        assert resolution.state is LinkState.ACTIVE
        assert resolution.report.title == report.title
        assert resolution.report.summary == report.summary

    @pytest.mark.asyncio
    async def test_expired_is_not_not_found(self, service, mock_db, report, owner_id):
        link = stored_link(report, owner_id, T + timedelta(days=30))
        mock_db.execute.return_value = make_result(one=link)

        resolution = await service.resolve_link(mock_db, link.id, now=T + timedelta(days=31))

        assert resolution.state is LinkState.EXPIRED
        assert resolution.report is None
        assert resolution.link is link

    @pytest.mark.asyncio
    async def test_missing_link(self, service, mock_db):
        mock_db.execute.return_value = make_result(one=None)

        resolution = await service.resolve_link(mock_db, uuid.uuid4(), now=T)

        assert resolution.state is LinkState.NOT_FOUND
        assert resolution.link is None

    def test_expiry_instant_is_expired(self, report, owner_id):
        link = stored_link(report, owner_id, T)

        assert link_state(link, T) is LinkState.EXPIRED
        assert link_state(link, T - timedelta(seconds=1)) is LinkState.ACTIVE

    def test_naive_expiry_is_utc(self, report, owner_id):
        link = stored_link(report, owner_id, datetime(2024, 4, 1, 12, 0))

        assert link_state(link, T + timedelta(minutes=1)) is LinkState.EXPIRED


class TestExtendLink:

    @pytest.mark.asyncio
    async def test_extend_is_absolute(self, service, mock_db, report, owner_id):
        link = stored_link(report, owner_id, T + timedelta(days=30))
        mock_db.execute.return_value = make_result(one=link)

        extended = await service.extend_link(mock_db, link.id, 7, owner_id=owner_id, now=T)

        assert extended.expires_at == T + timedelta(days=7)

    @pytest.mark.asyncio
    async def test_extend_reactivates_expired_link(self, service, mock_db, report, owner_id):
        link = stored_link(report, owner_id, T - timedelta(days=5))
        mock_db.execute.return_value = make_result(one=link)

        await service.extend_link(mock_db, link.id, 30, owner_id=owner_id, now=T)

        assert link_state(link, T) is LinkState.ACTIVE

    @pytest.mark.asyncio
    async def test_extend_missing_link(self, service, mock_db, owner_id):
        mock_db.execute.return_value = make_result(one=None)

        with pytest.raises(NotFoundError):
            await service.extend_link(mock_db, uuid.uuid4(), 7, owner_id=owner_id, now=T)

    @pytest.mark.asyncio
    async def test_extend_link_of_other_user(self, service, mock_db, report, owner_id):
        link = stored_link(report, uuid.uuid4(), T + timedelta(days=30))
        mock_db.execute.return_value = make_result(one=link)

        with pytest.raises(NotFoundError):
            await service.extend_link(mock_db, link.id, 7, owner_id=owner_id, now=T)


class TestDeleteLink:

    @pytest.mark.asyncio
    async def test_delete(self, service, mock_db, report, owner_id):
        link = stored_link(report, owner_id, T + timedelta(days=30))
        mock_db.execute.return_value = make_result(one=link)

        await service.delete_link(mock_db, link.id, owner_id=owner_id)

        mock_db.delete.assert_awaited_once_with(link)

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, service, mock_db, owner_id):
        mock_db.execute.return_value = make_result(one=None)

        await service.delete_link(mock_db, uuid.uuid4(), owner_id=owner_id)
        await service.delete_link(mock_db, uuid.uuid4(), owner_id=owner_id)

        mock_db.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_ignores_other_users_links(self, service, mock_db, report, owner_id):
        link = stored_link(report, uuid.uuid4(), T + timedelta(days=30))
        mock_db.execute.return_value = make_result(one=link)

        await service.delete_link(mock_db, link.id, owner_id=owner_id)

        mock_db.delete.assert_not_called()


class TestListLinks:

    @pytest.mark.asyncio
    async def test_list(self, service, mock_db, report, owner_id):
        links = [stored_link(report, owner_id, T), stored_link(report, owner_id, T)]
        mock_db.execute.return_value = make_result(rows=links)

        result = await service.list_links(mock_db, owner_id=owner_id)

        assert result == links
