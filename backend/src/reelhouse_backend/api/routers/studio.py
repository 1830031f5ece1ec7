"""HTTP endpoints for running a studio."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from reelhouse_backend.api.dependencies import get_studio_service
from reelhouse_backend.api.models import (
    AcceptOfferRequest,
    ActionResponse,
    AttachTalentRequest,
    ChronicleResponse,
    FestivalSubmissionRequest,
    FundMarketingRequest,
    OptionChoiceRequest,
    ReleaseWeekRequest,
    SpecializationRequest,
    StudioStateResponse,
)
from reelhouse_backend.api.services import StudioService
from reelhouse_backend.game_logic import ReleaseReport, SequelEligibility
from reelhouse_backend.shared import Money

router = APIRouter(prefix="/studio", tags=["studio"])


def _not_found(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


@router.get("/{studio_id}", response_model=StudioStateResponse)
def get_studio(
    studio_id: str, service: StudioService = Depends(get_studio_service)
) -> StudioStateResponse:
    """Return the full studio view."""

    return service.describe(studio_id)


@router.post("/{studio_id}/restart", response_model=StudioStateResponse)
def restart_studio(
    studio_id: str, service: StudioService = Depends(get_studio_service)
) -> StudioStateResponse:
    """Throw the studio away and start again; allowed after bankruptcy."""

    return service.restart(studio_id)


@router.get("/{studio_id}/chronicle", response_model=ChronicleResponse)
def get_chronicle(
    studio_id: str, service: StudioService = Depends(get_studio_service)
) -> ChronicleResponse:
    """Return the studio chronicle, oldest first."""

    history = service.query(studio_id, lambda studio: studio.chronicle())
    return ChronicleResponse(entries=list(history.entries))


@router.get(
    "/{studio_id}/projects/{project_id}/release-report",
    response_model=ReleaseReport,
)
def get_release_report(
    studio_id: str,
    project_id: str,
    service: StudioService = Depends(get_studio_service),
) -> ReleaseReport:
    """Return a released project's report."""

    report = service.query(
        studio_id, lambda studio: studio.release_report(project_id)
    )
    if report is None:
        raise _not_found("No release report for this project")
    return report


@router.get(
    "/{studio_id}/projects/{project_id}/sequel-eligibility",
    response_model=SequelEligibility,
)
def get_sequel_eligibility(
    studio_id: str,
    project_id: str,
    service: StudioService = Depends(get_studio_service),
) -> SequelEligibility:
    """Return whether a project can spawn a sequel."""

    eligibility = service.query(
        studio_id, lambda studio: studio.sequel_eligibility(project_id)
    )
    if eligibility is None:
        raise _not_found("Project not found")
    return eligibility


@router.post("/{studio_id}/end-week", response_model=ActionResponse)
def end_week(
    studio_id: str, service: StudioService = Depends(get_studio_service)
) -> ActionResponse:
    """Advance the studio by one week."""

    return service.perform(studio_id, lambda studio: studio.end_week())


@router.post(
    "/{studio_id}/crises/{crisis_id}/resolve", response_model=ActionResponse
)
def resolve_crisis(
    studio_id: str,
    crisis_id: str,
    payload: OptionChoiceRequest,
    service: StudioService = Depends(get_studio_service),
) -> ActionResponse:
    """Settle a pending crisis."""

    try:
        return service.perform(
            studio_id,
            lambda studio: studio.resolve_crisis(crisis_id, payload.option_id),
        )
    except LookupError as exc:
        raise _not_found(str(exc)) from exc


@router.post(
    "/{studio_id}/decisions/{decision_id}/resolve", response_model=ActionResponse
)
def resolve_decision(
    studio_id: str,
    decision_id: str,
    payload: OptionChoiceRequest,
    service: StudioService = Depends(get_studio_service),
) -> ActionResponse:
    """Answer a queued decision."""

    try:
        return service.perform(
            studio_id,
            lambda studio: studio.resolve_decision(decision_id, payload.option_id),
        )
    except LookupError as exc:
        raise _not_found(str(exc)) from exc


@router.post("/{studio_id}/optional-action", response_model=ActionResponse)
def run_optional_action(
    studio_id: str, service: StudioService = Depends(get_studio_service)
) -> ActionResponse:
    """Buy a publicity push."""

    return service.perform(studio_id, lambda studio: studio.run_optional_action())


@router.post(
    "/{studio_id}/scripts/{script_id}/acquire", response_model=ActionResponse
)
def acquire_script(
    studio_id: str,
    script_id: str,
    service: StudioService = Depends(get_studio_service),
) -> ActionResponse:
    """Buy a script off the market."""

    return service.perform(studio_id, lambda studio: studio.acquire_script(script_id))


@router.post("/{studio_id}/scripts/{script_id}/pass", response_model=ActionResponse)
def pass_script(
    studio_id: str,
    script_id: str,
    service: StudioService = Depends(get_studio_service),
) -> ActionResponse:
    """Pass on a script."""

    return service.perform(studio_id, lambda studio: studio.pass_script(script_id))


@router.post(
    "/{studio_id}/projects/{project_id}/talent", response_model=ActionResponse
)
def attach_talent(
    studio_id: str,
    project_id: str,
    payload: AttachTalentRequest,
    service: StudioService = Depends(get_studio_service),
) -> ActionResponse:
    """Negotiate and attach talent to a project."""

    return service.perform(
        studio_id,
        lambda studio: studio.negotiate_and_attach_talent(
            project_id, payload.talent_id
        ),
    )


@router.post(
    "/{studio_id}/projects/{project_id}/advance", response_model=ActionResponse
)
def advance_project(
    studio_id: str,
    project_id: str,
    service: StudioService = Depends(get_studio_service),
) -> ActionResponse:
    """Move a project into its next phase."""

    return service.perform(
        studio_id, lambda studio: studio.advance_project_phase(project_id)
    )


@router.post(
    "/{studio_id}/projects/{project_id}/greenlight", response_model=ActionResponse
)
def approve_greenlight(
    studio_id: str,
    project_id: str,
    service: StudioService = Depends(get_studio_service),
) -> ActionResponse:
    """Greenlight a development project."""

    return service.perform(
        studio_id, lambda studio: studio.approve_greenlight(project_id)
    )


@router.post(
    "/{studio_id}/projects/{project_id}/rewrite", response_model=ActionResponse
)
def send_back_for_rewrite(
    studio_id: str,
    project_id: str,
    service: StudioService = Depends(get_studio_service),
) -> ActionResponse:
    """Send a development script back for another draft."""

    return service.perform(
        studio_id, lambda studio: studio.send_back_for_rewrite(project_id)
    )


@router.post(
    "/{studio_id}/projects/{project_id}/script-sprint", response_model=ActionResponse
)
def run_script_sprint(
    studio_id: str,
    project_id: str,
    service: StudioService = Depends(get_studio_service),
) -> ActionResponse:
    """Pay for a script sprint."""

    return service.perform(
        studio_id, lambda studio: studio.run_script_sprint(project_id)
    )


@router.post(
    "/{studio_id}/projects/{project_id}/polish", response_model=ActionResponse
)
def run_polish_pass(
    studio_id: str,
    project_id: str,
    service: StudioService = Depends(get_studio_service),
) -> ActionResponse:
    """Pay for a polish pass."""

    return service.perform(studio_id, lambda studio: studio.run_polish_pass(project_id))


@router.post(
    "/{studio_id}/projects/{project_id}/marketing", response_model=ActionResponse
)
def fund_marketing(
    studio_id: str,
    project_id: str,
    payload: FundMarketingRequest,
    service: StudioService = Depends(get_studio_service),
) -> ActionResponse:
    """Add to a project's marketing budget."""

    amount = Money.of(payload.amount)
    return service.perform(
        studio_id, lambda studio: studio.fund_marketing(project_id, amount)
    )


@router.post(
    "/{studio_id}/projects/{project_id}/sequel", response_model=ActionResponse
)
def start_sequel(
    studio_id: str,
    project_id: str,
    service: StudioService = Depends(get_studio_service),
) -> ActionResponse:
    """Open a sequel to a released project."""

    return service.perform(studio_id, lambda studio: studio.start_sequel(project_id))


@router.post(
    "/{studio_id}/projects/{project_id}/distribution", response_model=ActionResponse
)
def accept_distribution_offer(
    studio_id: str,
    project_id: str,
    payload: AcceptOfferRequest,
    service: StudioService = Depends(get_studio_service),
) -> ActionResponse:
    """Sign a distribution deal."""

    return service.perform(
        studio_id,
        lambda studio: studio.accept_distribution_offer(project_id, payload.offer_id),
    )


@router.post(
    "/{studio_id}/projects/{project_id}/release-week", response_model=ActionResponse
)
def set_release_week(
    studio_id: str,
    project_id: str,
    payload: ReleaseWeekRequest,
    service: StudioService = Depends(get_studio_service),
) -> ActionResponse:
    """Push a release date later."""

    return service.perform(
        studio_id, lambda studio: studio.set_release_week(project_id, payload.week)
    )


@router.post(
    "/{studio_id}/projects/{project_id}/festival", response_model=ActionResponse
)
def submit_to_festival(
    studio_id: str,
    project_id: str,
    payload: FestivalSubmissionRequest,
    service: StudioService = Depends(get_studio_service),
) -> ActionResponse:
    """Enter a project into a festival."""

    return service.perform(
        studio_id,
        lambda studio: studio.submit_to_festival(project_id, payload.festival),
    )


@router.put("/{studio_id}/specialization", response_model=ActionResponse)
def set_specialization(
    studio_id: str,
    payload: SpecializationRequest,
    service: StudioService = Depends(get_studio_service),
) -> ActionResponse:
    """Change the studio's specialization."""

    return service.perform(
        studio_id, lambda studio: studio.set_specialization(payload.specialization)
    )
