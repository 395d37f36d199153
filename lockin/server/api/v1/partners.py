"""
API endpoints for accountability partners and partner invites.

Invites can target an email address or be open referral links redeemed by
code. Accepting creates a mirrored pair of partner records.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter

from lockin.core.models.io.common import StatusResult
from lockin.core.models.io.partners import (
    AcceptInviteByCodeRequest,
    InviteLinkRead,
    PartnerInviteRead,
    PartnerRead,
    PendingInviteCount,
    SendInviteRequest,
)
from lockin.core.models.io.shared_videos import SharedVideoRead
from lockin.core.services.invite_codes import build_invite_link
from lockin.server.auth import IdentityDep, OptionalIdentityDep
from lockin.server.core.config import settings
from lockin.server.services.deps import PartnerServiceDep

router = APIRouter(tags=["partners"])

_INVITE_RESPONSES = {
    400: {"description": "Invite is no longer pending or has expired"},
    401: {"description": "Unauthenticated call"},
    403: {"description": "This invite is not for you"},
    404: {"description": "Invite not found"},
}


@router.get(
    "",
    response_model=List[PartnerRead],
    summary="List Partners",
    description="List the caller's active accountability partners.",
)
async def list_partners(identity: OptionalIdentityDep, service: PartnerServiceDep) -> List[PartnerRead]:
    if identity is None:
        return []
    return [PartnerRead.model_validate(p) for p in await service.list_partners(identity.token_identifier)]


@router.get(
    "/invites/sent",
    response_model=List[PartnerInviteRead],
    summary="List Sent Invites",
    description="List the pending invites the caller has sent.",
)
async def list_sent_invites(identity: OptionalIdentityDep, service: PartnerServiceDep) -> List[PartnerInviteRead]:
    if identity is None:
        return []
    invites = await service.list_sent_invites(identity.token_identifier)
    return [PartnerInviteRead.model_validate(invite) for invite in invites]


@router.get(
    "/invites/received",
    response_model=List[PartnerInviteRead],
    summary="List Received Invites",
    description="List pending invites addressed to the caller's email.",
)
async def list_received_invites(
    identity: OptionalIdentityDep, service: PartnerServiceDep
) -> List[PartnerInviteRead]:
    if identity is None:
        return []
    return [PartnerInviteRead.model_validate(invite) for invite in await service.list_received_invites(identity)]


@router.get(
    "/invites/received/count",
    response_model=PendingInviteCount,
    summary="Count Received Invites",
    description="Number of pending invites addressed to the caller, for badge display.",
)
async def pending_invite_count(identity: OptionalIdentityDep, service: PartnerServiceDep) -> PendingInviteCount:
    if identity is None:
        return PendingInviteCount(count=0)
    return PendingInviteCount(count=await service.pending_invite_count(identity))


@router.get(
    "/invites/code/{code}",
    response_model=Optional[PartnerInviteRead],
    summary="Find Invite By Code",
    description=(
        "Look up an invite by its share code. Returns null for anonymous callers "
        "and when no invite has that code."
    ),
)
async def get_invite_by_code(
    code: str, identity: OptionalIdentityDep, service: PartnerServiceDep
) -> Optional[PartnerInviteRead]:
    if identity is None:
        return None
    invite = await service.find_invite_by_code(code)
    return PartnerInviteRead.model_validate(invite) if invite else None


@router.post(
    "/invites",
    response_model=PartnerInviteRead,
    summary="Send Invite",
    description="Invite someone by email. The invite expires after seven days.",
    responses={
        400: {"description": "Self-invite, duplicate pending invite or already partners"},
        401: {"description": "Unauthenticated call"},
    },
)
async def send_invite(data: SendInviteRequest, identity: IdentityDep, service: PartnerServiceDep) -> PartnerInviteRead:
    return PartnerInviteRead.model_validate(await service.send_invite(identity, data.email))


@router.post(
    "/invites/link",
    response_model=InviteLinkRead,
    summary="Create Invite Link",
    description="Create an open referral invite that anyone with the link can accept.",
    responses={401: {"description": "Unauthenticated call"}},
)
async def create_invite_link(identity: IdentityDep, service: PartnerServiceDep) -> InviteLinkRead:
    """
    Create an open invite link.

    The response carries the invite together with its shareable ``link``,
    built from the public base URL when one is configured and from the app's
    custom scheme otherwise.
    """
    invite = await service.create_invite_link(identity)
    link = build_invite_link(invite.code, settings.public_base_url)
    return InviteLinkRead.model_validate({**PartnerInviteRead.model_validate(invite).model_dump(), "link": link})


@router.post(
    "/invites/accept",
    response_model=StatusResult,
    summary="Accept Invite By Code",
    responses=_INVITE_RESPONSES,
)
async def accept_invite_by_code(
    data: AcceptInviteByCodeRequest, identity: IdentityDep, service: PartnerServiceDep
) -> StatusResult:
    return StatusResult(status=await service.accept_invite_by_code(identity, data.code))


@router.post(
    "/invites/{invite_id}/accept",
    response_model=StatusResult,
    summary="Accept Invite",
    description="Accept an invite. Accepting an already accepted invite reports `already_accepted`.",
    responses=_INVITE_RESPONSES,
)
async def accept_invite(invite_id: str, identity: IdentityDep, service: PartnerServiceDep) -> StatusResult:
    return StatusResult(status=await service.accept_invite(identity, invite_id))


@router.post(
    "/invites/{invite_id}/decline",
    response_model=StatusResult,
    summary="Decline Invite",
    responses=_INVITE_RESPONSES,
)
async def decline_invite(invite_id: str, identity: IdentityDep, service: PartnerServiceDep) -> StatusResult:
    return StatusResult(status=await service.decline_invite(identity, invite_id))


@router.delete(
    "/invites/{invite_id}",
    response_model=StatusResult,
    summary="Cancel Invite",
    description="Withdraw an invite the caller sent.",
    responses=_INVITE_RESPONSES,
)
async def cancel_invite(invite_id: str, identity: IdentityDep, service: PartnerServiceDep) -> StatusResult:
    return StatusResult(status=await service.cancel_invite(identity.token_identifier, invite_id))


@router.get(
    "/activity",
    response_model=List[SharedVideoRead],
    summary="Partner Activity",
    description="Videos the given partner has shared with the caller, newest first.",
    responses={400: {"description": "Not partners with this user"}},
)
async def partner_activity(
    partner_id: str, identity: OptionalIdentityDep, service: PartnerServiceDep
) -> List[SharedVideoRead]:
    """
    List the videos ``partner_id`` has shared with the caller.

    The partner id is a query parameter because identifiers embed the token
    issuer, which is a URL for Firebase tokens.
    """
    if identity is None:
        return []
    videos = await service.partner_activity(identity.token_identifier, partner_id)
    return [SharedVideoRead.model_validate(video) for video in videos]


@router.delete(
    "/{record_id}",
    response_model=StatusResult,
    summary="Remove Partner",
    description="End a partnership. Both mirrored records are removed.",
    responses={
        401: {"description": "Unauthenticated call"},
        403: {"description": "Record belongs to another user"},
        404: {"description": "Partner record not found"},
    },
)
async def remove_partner(record_id: str, identity: IdentityDep, service: PartnerServiceDep) -> StatusResult:
    return StatusResult(status=await service.remove_partner(identity.token_identifier, record_id))
