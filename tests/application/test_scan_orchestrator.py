"""
Tests for ScanOrchestrator.

Uses a real database with a mocked dispatcher so the commit ordering
around dispatch can be observed.

System role: Verification of the scan creation workflow
"""

import uuid

import pytest
from sqlalchemy import func, select

from auditscan.application.services.scan_orchestrator import ScanOrchestrator
from auditscan.boundary.db.CRUD.project_crud import project_crud
from auditscan.boundary.db.CRUD.scan_crud import scan_crud
from auditscan.boundary.db.models.project_model import ProjectStatus
from auditscan.boundary.db.models.scan_model import ScanModel
from auditscan.core.exceptions import ProjectNotFoundError, UnauthorizedError, ValidationError
from auditscan.models.identity import SessionIdentity
from auditscan.models.scan import CreateScanRequest


@pytest.fixture
async def owner(make_user):
    return await make_user(email="orchestrator@example.com")


@pytest.fixture
async def project(owner, make_project):
    return await make_project(owner.id, name="checkout")


async def test_create_commits_scan_and_project_before_dispatch(
    session_factory, test_async_db, owner, project, mock_dispatcher
):
    commits = []
    commits_at_dispatch = []
    original_commit = test_async_db.commit

    async def counting_commit():
        commits.append("commit")
        await original_commit()

    test_async_db.commit = counting_commit
    mock_dispatcher.dispatch.side_effect = lambda scan_id, project_id: commits_at_dispatch.append(len(commits))
    orchestrator = ScanOrchestrator(test_async_db, mock_dispatcher)

    scan = await orchestrator.create_scan(
        SessionIdentity(user_id=str(owner.id)),
        CreateScanRequest(projectId=str(project.id), type="security"),
    )

    assert scan["status"] == "PENDING"
    assert scan["type"] == "SECURITY"
    # Scan commit, then project commit, then dispatch
    assert commits_at_dispatch == [2]
    mock_dispatcher.dispatch.assert_called_once_with(scan["id"], project.id)
    async with session_factory() as other:
        stored = await scan_crud.get_by_id(other, scan["id"])
        stored_project = await project_crud.get_by_id(other, project.id)
    assert stored is not None
    assert stored_project.status == ProjectStatus.ANALYZING


async def test_unknown_type_defaults_to_comprehensive(test_async_db, owner, project, mock_dispatcher):
    orchestrator = ScanOrchestrator(test_async_db, mock_dispatcher)

    scan = await orchestrator.create_scan(
        SessionIdentity(email="orchestrator@example.com"),
        CreateScanRequest(projectId=str(project.id), type="bogus"),
    )

    assert scan["type"] == "COMPREHENSIVE"
    mock_dispatcher.dispatch.assert_called_once_with(scan["id"], project.id)


async def test_foreign_project_is_not_found_and_not_dispatched(
    test_async_db, project, make_user, mock_dispatcher
):
    intruder = await make_user(email="intruder@example.com")
    orchestrator = ScanOrchestrator(test_async_db, mock_dispatcher)

    with pytest.raises(ProjectNotFoundError):
        await orchestrator.create_scan(
            SessionIdentity(user_id=str(intruder.id)),
            CreateScanRequest(projectId=str(project.id)),
        )

    count = await test_async_db.execute(select(func.count(ScanModel.id)))
    assert count.scalar_one() == 0
    refreshed = await project_crud.get_by_id(test_async_db, project.id)
    assert refreshed.status == ProjectStatus.PENDING
    mock_dispatcher.dispatch.assert_not_called()


async def test_missing_project_id_is_rejected(test_async_db, owner, mock_dispatcher):
    orchestrator = ScanOrchestrator(test_async_db, mock_dispatcher)

    with pytest.raises(ValidationError):
        await orchestrator.create_scan(
            SessionIdentity(user_id=str(owner.id)),
            CreateScanRequest(),
        )

    mock_dispatcher.dispatch.assert_not_called()


async def test_unauthenticated_session_is_rejected(test_async_db, mock_dispatcher):
    orchestrator = ScanOrchestrator(test_async_db, mock_dispatcher)

    with pytest.raises(UnauthorizedError):
        await orchestrator.create_scan(
            SessionIdentity(),
            CreateScanRequest(projectId=str(uuid.uuid4())),
        )


async def test_list_scans_resolves_first_sight_user(test_async_db, mock_dispatcher):
    orchestrator = ScanOrchestrator(test_async_db, mock_dispatcher)

    scans = await orchestrator.list_scans(SessionIdentity(email="fresh@example.com"))

    assert scans == []


async def test_cancel_commits(session_factory, test_async_db, owner, project, mock_dispatcher):
    orchestrator = ScanOrchestrator(test_async_db, mock_dispatcher)
    identity = SessionIdentity(user_id=str(owner.id))
    scan = await orchestrator.create_scan(identity, CreateScanRequest(projectId=str(project.id)))

    outcome = await orchestrator.cancel_or_delete_scan(identity, str(scan["id"]))

    assert outcome == "cancelled"
    async with session_factory() as other:
        stored = await scan_crud.get_by_id(other, scan["id"])
    assert stored.status.value == "CANCELLED"
