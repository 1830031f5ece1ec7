"""HTTP endpoints of the studio API."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

import pytest
from fastapi.testclient import TestClient

from reelhouse_backend.api import create_api
from reelhouse_backend.api.dependencies import get_studio_service
from reelhouse_backend.api.models import ActionResponse
from reelhouse_backend.api.services import StudioService
from reelhouse_backend.game_logic import (
    BalanceConfiguration,
    InMemorySnapshotStore,
    WeekAdvanced,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

STUDIO = "/studio/studio-api"
HARBOR = "project-harbor-lights"


@pytest.fixture
def service(configuration: BalanceConfiguration) -> Iterator[StudioService]:
    studio_service = StudioService(
        InMemorySnapshotStore(), configuration=configuration
    )
    yield studio_service
    studio_service.close()


@pytest.fixture
def client(service: StudioService) -> Iterator[TestClient]:
    app = create_api()
    app.dependency_overrides[get_studio_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_get_studio_returns_the_opening_state(client: TestClient) -> None:
    response = client.get(STUDIO)

    assert response.status_code == 200
    body = response.json()
    assert body["studio_id"] == "studio-api"
    assert body["week"] == 1
    assert body["cash"]["amount"] == "50000000.00"
    assert body["tier"] == "indieStudio"
    assert [project["id"] for project in body["projects"]] == [
        HARBOR,
        "project-night-circuit",
    ]
    assert len(body["script_market"]) == 4
    assert len(body["decision_queue"]) == 1


def test_end_week_advances_and_reports_the_burn(
    client: TestClient, service: StudioService
) -> None:
    response = client.post(f"{STUDIO}/end-week")

    assert response.status_code == 200
    body = response.json()
    assert body["week"] == 2
    assert body["result"]["kind"] == "week_advanced"
    assert body["result"]["cash_delta"]["amount"] == "-230000.00"
    assert "Weekly burn: $230,000." in body["result"]["events"]

    service.session_for("studio-api").flush()
    assert client.get(STUDIO).json()["last_save_succeeded"] is True


def test_rejected_advance_lists_its_blockers(client: TestClient) -> None:
    response = client.post(f"{STUDIO}/projects/{HARBOR}/advance")

    assert response.status_code == 200
    result = response.json()["result"]
    assert result["kind"] == "rejected"
    assert "Director not attached" in result["blockers"]


def test_attach_talent_through_the_api(client: TestClient) -> None:
    response = client.post(
        f"{STUDIO}/projects/{HARBOR}/talent",
        json={"talent_id": "talent-ava-mercer"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["result"]["kind"] == "talent_attached"
    assert body["result"]["cost"]["amount"] == "1680000.00"
    assert body["cash"]["amount"] == "48320000.00"


def test_unknown_crisis_is_not_found(client: TestClient) -> None:
    response = client.post(
        f"{STUDIO}/crises/crisis-missing/resolve", json={"option_id": "pay"}
    )

    assert response.status_code == 404


def test_marketing_amount_must_be_positive(client: TestClient) -> None:
    response = client.post(
        f"{STUDIO}/projects/{HARBOR}/marketing", json={"amount": "0"}
    )

    assert response.status_code == 422


def test_release_report_is_missing_before_release(client: TestClient) -> None:
    response = client.get(f"{STUDIO}/projects/{HARBOR}/release-report")

    assert response.status_code == 404


def test_sequel_eligibility_explains_why_not(client: TestClient) -> None:
    response = client.get(f"{STUDIO}/projects/{HARBOR}/sequel-eligibility")

    assert response.status_code == 200
    body = response.json()
    assert body["eligible"] is False
    assert body["reason"] == "Only released films can spawn sequels."


def test_restart_returns_a_fresh_studio(client: TestClient) -> None:
    client.post(f"{STUDIO}/end-week")

    response = client.post(f"{STUDIO}/restart")

    assert response.status_code == 200
    assert response.json()["week"] == 1


def test_chronicle_starts_empty(client: TestClient) -> None:
    response = client.get(f"{STUDIO}/chronicle")

    assert response.status_code == 200
    assert response.json() == {"entries": []}


def test_concurrent_end_weeks_apply_one_by_one(service: StudioService) -> None:
    def end_week(_: int) -> ActionResponse:
        return service.perform("studio-race", lambda studio: studio.end_week())

    with ThreadPoolExecutor(max_workers=8) as pool:
        responses = list(pool.map(end_week, range(12)))

    advanced = [r for r in responses if isinstance(r.result, WeekAdvanced)]
    assert advanced
    assert sorted(r.week for r in advanced) == list(range(2, 2 + len(advanced)))
    assert service.describe("studio-race").week == 1 + len(advanced)
