"""Models used for API request and response payloads."""

from reelhouse_backend.api.models.studio import (
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

__all__ = [
    "AcceptOfferRequest",
    "ActionResponse",
    "AttachTalentRequest",
    "ChronicleResponse",
    "FestivalSubmissionRequest",
    "FundMarketingRequest",
    "OptionChoiceRequest",
    "ReleaseWeekRequest",
    "SpecializationRequest",
    "StudioStateResponse",
]
